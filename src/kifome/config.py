"""Runtime settings for kifome, read from the environment or a .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storage keys, list titles and service options."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shopping list storage keys
    weekly_list_key: str = "@kifome:weekly_shopping_list"
    single_list_prefix: str = "@kifome:single_list:"

    # Display defaults
    weekly_list_title: str = "Lista de Compras Semanal"
    single_list_title_prefix: str = "Lista para"
    default_to_taste_marker: str = "a gosto"

    # Service
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:8081,http://localhost:19006"

    @property
    def origins(self) -> list[str]:
        """Get the CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """True when running locally."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()


settings = get_settings()

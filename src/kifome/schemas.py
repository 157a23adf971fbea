"""Schemas for recipes and weekly plans returned by the recipe generator."""

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    """Generated recipe."""

    model_config = ConfigDict(populate_by_name=True)

    titulo: str
    tempo_preparo: str = Field("", alias="tempoPreparo")
    descricao: str = ""
    passos: list[str] = Field(default_factory=list)
    ingredientes: list[str] = Field(default_factory=list)
    servings: int | None = Field(None, ge=1)


class DayMeals(BaseModel):
    """Lunch and dinner for one day of the week."""

    almoco: Recipe | None = None
    janta: Recipe | None = None


class WeeklyPlan(BaseModel):
    """Generated weekly meal plan keyed by weekday (segunda ... domingo)."""

    semana: dict[str, DayMeals | None] = Field(default_factory=dict)

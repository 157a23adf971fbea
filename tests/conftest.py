"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from kifome.config import Settings
from kifome.main import app
from kifome.plan.shopping_list import InMemoryListStore, ShoppingListService
from kifome.routers.shopping_lists import get_shopping_list_service
from kifome.schemas import Recipe, WeeklyPlan

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def lasanha_recipe():
    """Generated recipe for a lasagna."""
    return Recipe(
        titulo="Lasanha à Bolonhesa",
        tempoPreparo="60 minutos",
        descricao="Lasanha clássica com molho de carne.",
        passos=["Prepare o molho.", "Monte as camadas.", "Asse por 40 minutos."],
        ingredientes=[
            "500g Carne moída",
            "2 dentes de alho picados",
            "1 Cebola picada",
            "200 ml Leite",
            "Sal a gosto",
        ],
        servings=4,
    )


@pytest.fixture
def escondidinho_recipe():
    """Generated recipe sharing ingredients with the lasagna."""
    return Recipe(
        titulo="Escondidinho de Carne",
        ingredientes=[
            "500 g Carne moída",
            "3 dentes de alho picados",
            "1 xícara Leite",
            "Sal a gosto",
            "Pimenta do reino a gosto",
        ],
    )


@pytest.fixture
def weekly_plan():
    """Weekly plan with a couple of meals filled in."""
    return WeeklyPlan.model_validate(
        {
            "semana": {
                "segunda": {
                    "almoco": {
                        "titulo": "Bife Acebolado",
                        "ingredientes": ["500g Carne moída", "Sal a gosto"],
                    },
                    "janta": None,
                },
                "terca": {
                    "almoco": None,
                    "janta": {
                        "titulo": "Macarronada",
                        "ingredientes": [
                            "500 g Carne moída",
                            "2 dentes Alho",
                            "1/2 xícara de azeite",
                        ],
                    },
                },
                "quarta": None,
                "quinta": {
                    "almoco": {
                        "titulo": "Arroz Temperado",
                        "ingredientes": ["3 dentes Alho", "1/4 xícara de azeite", "Sal a gosto"],
                    },
                },
            }
        }
    )


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Settings with the default storage keys."""
    return Settings(_env_file=None)


@pytest.fixture
def service(settings):
    """Shopping list service backed by an empty in-memory store."""
    return ShoppingListService(store=InMemoryListStore(), settings=settings)


@pytest.fixture
def client(service):
    """API client using the isolated shopping list service."""
    app.dependency_overrides[get_shopping_list_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

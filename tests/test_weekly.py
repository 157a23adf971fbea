"""Unit tests for weekly plan ingredient processing."""

from kifome.plan.weekly import (
    MEAL_TYPES,
    WEEK_DAYS,
    collect_weekly_ingredients,
    process_weekly_ingredients,
    weekly_plan_items,
)
from kifome.schemas import WeeklyPlan


class TestCollectWeeklyIngredients:
    """Tests for collect_weekly_ingredients function."""

    def test_days_and_meals_in_order(self, weekly_plan):
        pairs = list(collect_weekly_ingredients(weekly_plan))
        assert pairs == [
            ("Bife Acebolado", "500g Carne moída"),
            ("Bife Acebolado", "Sal a gosto"),
            ("Macarronada", "500 g Carne moída"),
            ("Macarronada", "2 dentes Alho"),
            ("Macarronada", "1/2 xícara de azeite"),
            ("Arroz Temperado", "3 dentes Alho"),
            ("Arroz Temperado", "1/4 xícara de azeite"),
            ("Arroz Temperado", "Sal a gosto"),
        ]

    def test_unknown_days_ignored(self):
        plan = WeeklyPlan.model_validate(
            {"semana": {"feriado": {"almoco": {"titulo": "Churrasco", "ingredientes": ["1 kg Picanha"]}}}}
        )
        assert list(collect_weekly_ingredients(plan)) == []

    def test_empty_plan(self):
        assert list(collect_weekly_ingredients(WeeklyPlan())) == []

    def test_week_layout(self):
        assert len(WEEK_DAYS) == 7
        assert MEAL_TYPES == ("almoco", "janta")


class TestProcessWeeklyIngredients:
    """Tests for process_weekly_ingredients function."""

    def test_grouped_and_summed(self, weekly_plan):
        assert process_weekly_ingredients(weekly_plan) == [
            "5 dente Alho",
            "3/4 xícara Azeite",
            "1000 g Carne Moída",
            "Sal a gosto",
        ]

    def test_items_keep_provenance(self, weekly_plan):
        items = {item.name: item for item in weekly_plan_items(weekly_plan)}

        assert items["Carne Moída"].recipe_title == "Bife Acebolado, Macarronada"
        assert items["Alho"].recipe_title == "Macarronada, Arroz Temperado"
        assert items["Sal"].quantity == "a gosto"

    def test_empty_plan(self):
        assert process_weekly_ingredients(WeeklyPlan()) == []

"""Ingredient processing for generated weekly meal plans."""

from collections.abc import Iterator

from kifome.logging_config import get_logger
from kifome.models import ShoppingItem
from kifome.plan.consolidator import (
    consolidate,
    format_lines,
    items_from_ingredients,
)
from kifome.schemas import WeeklyPlan

logger = get_logger(__name__)

WEEK_DAYS: tuple[str, ...] = (
    "segunda",
    "terca",
    "quarta",
    "quinta",
    "sexta",
    "sabado",
    "domingo",
)

MEAL_TYPES: tuple[str, ...] = ("almoco", "janta")


def collect_weekly_ingredients(plan: WeeklyPlan) -> Iterator[tuple[str, str]]:
    """Yield (recipe title, ingredient line) for every meal of the week, in order."""
    for day in WEEK_DAYS:
        meals = plan.semana.get(day)
        if meals is None:
            continue

        for meal_type in MEAL_TYPES:
            recipe = getattr(meals, meal_type)
            if recipe is None or not recipe.ingredientes:
                continue

            for ingredient in recipe.ingredientes:
                yield recipe.titulo, ingredient


def weekly_plan_items(plan: WeeklyPlan) -> list[ShoppingItem]:
    """Consolidated shopping items for a whole week, with recipe provenance."""
    items: list[ShoppingItem] = []
    for title, ingredient in collect_weekly_ingredients(plan):
        items.extend(items_from_ingredients([ingredient], recipe_title=title))

    consolidated = consolidate(items)
    logger.info(f"Weekly plan: {len(items)} ingredient lines -> {len(consolidated)} items")
    return consolidated


def process_weekly_ingredients(plan: WeeklyPlan) -> list[str]:
    """
    Group and sum the ingredients of a weekly plan into display lines.

    Quantified ingredients come first, sorted by name; to-taste and
    unquantified ingredients are appended after them, also sorted.
    """
    return format_lines(weekly_plan_items(plan))

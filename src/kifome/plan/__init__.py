"""Shopping list consolidation and management."""

from kifome.plan.consolidator import (
    consolidate,
    consolidate_ingredients,
    format_item,
    items_from_ingredients,
)
from kifome.plan.shopping_list import (
    InMemoryListStore,
    ItemNotFoundError,
    ListNotFoundError,
    ShoppingListError,
    ShoppingListService,
)
from kifome.plan.weekly import process_weekly_ingredients, weekly_plan_items

__all__ = [
    "InMemoryListStore",
    "ItemNotFoundError",
    "ListNotFoundError",
    "ShoppingListError",
    "ShoppingListService",
    "consolidate",
    "consolidate_ingredients",
    "format_item",
    "items_from_ingredients",
    "process_weekly_ingredients",
    "weekly_plan_items",
]

"""Shopping list management: the weekly list and per-recipe lists."""

import json
from typing import Any, Protocol

from kifome.config import Settings, get_settings
from kifome.logging_config import LoggingContext, get_logger
from kifome.models import ShoppingItem, ShoppingList, week_id_for
from kifome.plan.consolidator import consolidate, items_from_ingredients
from kifome.schemas import Recipe

logger = get_logger(__name__)

UPDATABLE_ITEM_FIELDS = frozenset({"name", "quantity", "checked"})


class ShoppingListError(Exception):
    """Base error for shopping list operations."""


class ListNotFoundError(ShoppingListError):
    """Raised when a shopping list does not exist."""


class ItemNotFoundError(ShoppingListError):
    """Raised when a shopping list item does not exist."""


# =============================================================================
# Storage
# =============================================================================


class ListStore(Protocol):
    """Key-value storage of serialized lists."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self, prefix: str = "") -> list[str]: ...


class InMemoryListStore:
    """Process-local key-value store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]


# =============================================================================
# Service
# =============================================================================


class ShoppingListService:
    """
    Manages the weekly shopping list and the single-recipe lists.

    Lists are stored as JSON blobs in a key-value store. New ingredients
    added to the weekly list are consolidated with the existing ones.
    """

    def __init__(self, store: ListStore | None = None, settings: Settings | None = None):
        self.store = store if store is not None else InMemoryListStore()
        self.settings = settings or get_settings()

    # -- serialization --------------------------------------------------------

    def _load(self, key: str) -> ShoppingList | None:
        data = self.store.get(key)
        if data is None:
            return None
        return ShoppingList.from_dict(json.loads(data))

    def _save(self, key: str, shopping_list: ShoppingList) -> None:
        self.store.set(key, json.dumps(shopping_list.to_dict(), ensure_ascii=False))

    def _single_key(self, list_id: str) -> str:
        return f"{self.settings.single_list_prefix}{list_id}"

    # -- weekly list ----------------------------------------------------------

    def get_weekly_list(self) -> ShoppingList | None:
        """Get the weekly shopping list, if one exists."""
        return self._load(self.settings.weekly_list_key)

    def save_weekly_list(self, shopping_list: ShoppingList) -> None:
        """Replace the weekly shopping list."""
        self._save(self.settings.weekly_list_key, shopping_list)

    def clear_weekly_list(self) -> None:
        """Remove the weekly shopping list."""
        logger.info("Clearing weekly shopping list")
        self.store.delete(self.settings.weekly_list_key)

    def add_items_to_weekly_list(self, items: list[ShoppingItem]) -> ShoppingList:
        """
        Add items to the weekly list, consolidating them with existing items.

        Creates the weekly list when there is none yet.
        """
        shopping_list = self.get_weekly_list()

        if shopping_list is None:
            shopping_list = ShoppingList(
                title=self.settings.weekly_list_title,
                type="weekly",
                items=consolidate(items),
                week_id=week_id_for(),
            )
            logger.info(f"Created weekly shopping list with {len(shopping_list.items)} items")
        else:
            with LoggingContext(list_id=shopping_list.id):
                before = len(shopping_list.items)
                shopping_list.items = consolidate([*shopping_list.items, *items])
                logger.info(
                    f"Added {len(items)} items to weekly list: "
                    f"{before} -> {len(shopping_list.items)} entries"
                )

        self.save_weekly_list(shopping_list)
        return shopping_list

    def add_recipe_to_weekly_list(self, recipe: Recipe, recipe_id: str | None = None) -> ShoppingList:
        """Add every ingredient of a recipe to the weekly list."""
        items = items_from_ingredients(
            recipe.ingredientes,
            recipe_title=recipe.titulo,
            recipe_id=recipe_id,
        )
        return self.add_items_to_weekly_list(items)

    def update_weekly_list_item(self, item_id: str, **updates: Any) -> ShoppingItem:
        """
        Update fields of a weekly list item (name, quantity, checked).

        Raises:
            ItemNotFoundError: If there is no weekly list or no such item.
            ValueError: If an unknown field is given.
        """
        unknown = set(updates) - UPDATABLE_ITEM_FIELDS
        if unknown:
            raise ValueError(f"Cannot update item fields: {', '.join(sorted(unknown))}")

        shopping_list = self.get_weekly_list()
        item = shopping_list.find_item(item_id) if shopping_list else None
        if shopping_list is None or item is None:
            raise ItemNotFoundError(f"Item {item_id} not found in weekly list")

        for name, value in updates.items():
            setattr(item, name, value)

        self.save_weekly_list(shopping_list)
        logger.info(
            f"Updated weekly item {item_id}: "
            f"{shopping_list.checked_count}/{len(shopping_list.items)} checked"
        )
        return item

    # -- single-recipe lists ----------------------------------------------------

    def create_single_list(self, recipe: Recipe, recipe_id: str | None = None) -> ShoppingList:
        """Create and store a shopping list for one recipe."""
        items = items_from_ingredients(
            recipe.ingredientes,
            recipe_title=recipe.titulo,
            recipe_id=recipe_id,
        )
        shopping_list = ShoppingList(
            title=f"{self.settings.single_list_title_prefix} {recipe.titulo}",
            type="single",
            items=consolidate(items),
            recipe_id=recipe_id,
        )

        self.save_single_list(shopping_list)
        logger.info(
            f"Created shopping list {shopping_list.id} for {recipe.titulo!r} "
            f"with {len(shopping_list.items)} items"
        )
        return shopping_list

    def save_single_list(self, shopping_list: ShoppingList) -> None:
        """Store a single-recipe list under its id."""
        self._save(self._single_key(shopping_list.id), shopping_list)

    def get_single_list(self, list_id: str) -> ShoppingList:
        """
        Get a single-recipe list.

        Raises:
            ListNotFoundError: If the list does not exist.
        """
        shopping_list = self._load(self._single_key(list_id))
        if shopping_list is None:
            raise ListNotFoundError(f"Shopping list {list_id} not found")
        return shopping_list

    def list_single_lists(self) -> list[ShoppingList]:
        """All single-recipe lists, newest first."""
        lists = [
            shopping_list
            for key in self.store.keys(self.settings.single_list_prefix)
            if (shopping_list := self._load(key)) is not None
        ]
        return sorted(lists, key=lambda entry: entry.created_at, reverse=True)

    def delete_single_list(self, list_id: str) -> None:
        """
        Delete a single-recipe list.

        Raises:
            ListNotFoundError: If the list does not exist.
        """
        key = self._single_key(list_id)
        if self.store.get(key) is None:
            raise ListNotFoundError(f"Shopping list {list_id} not found")

        self.store.delete(key)
        logger.info(f"Deleted shopping list {list_id}")

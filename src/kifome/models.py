"""Shopping list data model."""

import time
import uuid
from datetime import date
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

ListType = Literal["weekly", "single"]


def generate_list_id() -> str:
    """Generate an opaque identifier for lists and list items."""
    return uuid.uuid4().hex


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def week_id_for(day: date | None = None) -> str:
    """ISO week a weekly list belongs to, e.g. "2026-W42"."""
    year, week, _ = (day or date.today()).isocalendar()
    return f"{year}-W{week:02d}"


@dataclass
class ShoppingItem:
    """A single line of a shopping list."""

    name: str
    quantity: str = ""
    checked: bool = False
    id: str = field(default_factory=generate_list_id)
    recipe_id: str | None = None
    recipe_title: str | None = None  # comma-joined titles of contributing recipes

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingItem":
        return cls(
            id=data.get("id") or generate_list_id(),
            name=data.get("name", ""),
            quantity=data.get("quantity") or "",
            checked=bool(data.get("checked", False)),
            recipe_id=data.get("recipe_id"),
            recipe_title=data.get("recipe_title"),
        )


@dataclass
class ShoppingList:
    """A complete shopping list, either the weekly list or one for a single recipe."""

    title: str
    type: ListType
    items: list[ShoppingItem] = field(default_factory=list)
    id: str = field(default_factory=generate_list_id)
    created_at: int = field(default_factory=now_millis)
    week_id: str | None = None  # weekly lists only
    recipe_id: str | None = None  # single lists only

    def find_item(self, item_id: str) -> ShoppingItem | None:
        """Look up an item by id."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.checked)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShoppingList":
        return cls(
            id=data.get("id") or generate_list_id(),
            title=data.get("title", ""),
            type=data.get("type", "single"),
            items=[ShoppingItem.from_dict(item) for item in data.get("items", [])],
            created_at=data.get("created_at") or now_millis(),
            week_id=data.get("week_id"),
            recipe_id=data.get("recipe_id"),
        )

"""Consolidation of shopping items gathered from one or more recipes."""

import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import replace

from kifome.logging_config import get_logger
from kifome.models import ShoppingItem
from kifome.normalize.names import normalize_name
from kifome.normalize.parser import build_key, parse_ingredient, split_descriptor
from kifome.normalize.quantity import (
    Numeric,
    ToTaste,
    format_quantity,
    parse_quantity,
    sum_quantities,
)

logger = get_logger(__name__)

QUANTITY_SEPARATOR = ", "


# =============================================================================
# Keys and Names
# =============================================================================


def canonical_item_name(name: str) -> str:
    """Normalize an item name, keeping a trailing descriptor lowercase."""
    base, descriptor = split_descriptor(name or "")
    base = normalize_name(base)
    if descriptor:
        return f"{base} {descriptor}"
    return base


def consolidation_key(name: str) -> str:
    """
    Build the grouping key for a shopping item name.

    "Cebola picada" -> "cebola picada", "Cebola" -> "cebola "
    """
    base, descriptor = split_descriptor(name or "")
    return build_key(normalize_name(base), descriptor)


def sort_key(name: str) -> str:
    """Case- and accent-insensitive sort key for display names."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


# =============================================================================
# Merging
# =============================================================================


def _part_unit(part: str) -> str:
    quantity = parse_quantity(part)
    return quantity.unit if isinstance(quantity, Numeric) else part


def _merge_into_parts(parts: list[str], incoming: str) -> list[str]:
    """Add an expression to a list of incompatible quantity expressions."""
    incoming_qty = parse_quantity(incoming)

    if isinstance(incoming_qty, Numeric):
        for index, part in enumerate(parts):
            part_qty = parse_quantity(part)
            if isinstance(part_qty, Numeric) and part_qty.unit == incoming_qty.unit:
                total = Numeric(sum_quantities(part_qty.amount, incoming_qty.amount), part_qty.unit)
                parts[index] = format_quantity(total)
                return parts

    parts.append(incoming)
    return parts


def _split_parts(quantity: str) -> list[str]:
    return [part.strip() for part in quantity.split(QUANTITY_SEPARATOR) if part.strip()]


def merge_quantities(existing: str, incoming: str) -> str:
    """
    Merge two display quantities for the same ingredient.

    - Either side to taste: a single to-taste marker survives
    - Same canonical unit: amounts are summed ("2 dentes" + "3 dentes" -> "5 dente")
    - An empty side adds nothing
    - Otherwise every expression is kept, one per unit, joined with ", "
      and ordered by unit
    """
    existing = " ".join((existing or "").split())
    incoming = " ".join((incoming or "").split())

    existing_qty = parse_quantity(existing)
    incoming_qty = parse_quantity(incoming)

    if isinstance(existing_qty, ToTaste):
        return existing_qty.marker
    if isinstance(incoming_qty, ToTaste):
        return incoming_qty.marker

    if not incoming:
        return existing
    if not existing:
        return incoming

    if (
        isinstance(existing_qty, Numeric)
        and isinstance(incoming_qty, Numeric)
        and existing_qty.unit == incoming_qty.unit
    ):
        amount = sum_quantities(existing_qty.amount, incoming_qty.amount)
        return format_quantity(Numeric(amount, existing_qty.unit))

    logger.debug(f"Cannot sum {existing!r} and {incoming!r}, listing both")
    parts = _split_parts(existing)
    for part in _split_parts(incoming):
        parts = _merge_into_parts(parts, part)

    # Ordered by unit so the result does not depend on which side came first
    return QUANTITY_SEPARATOR.join(sorted(parts, key=lambda part: sort_key(_part_unit(part))))


def merge_provenance(existing: str | None, incoming: str | None) -> str | None:
    """Join recipe titles, skipping one that is already listed."""
    if not incoming:
        return existing
    if not existing:
        return incoming
    if incoming in existing:
        return existing
    return f"{existing}, {incoming}"


def merge_items(existing: ShoppingItem, incoming: ShoppingItem) -> ShoppingItem:
    """Merge an incoming item into an accumulator item, returning a new item."""
    return replace(
        existing,
        quantity=merge_quantities(existing.quantity, incoming.quantity),
        recipe_title=merge_provenance(existing.recipe_title, incoming.recipe_title),
    )


# =============================================================================
# Consolidation
# =============================================================================


def consolidate(items: Iterable[ShoppingItem]) -> list[ShoppingItem]:
    """
    Consolidate shopping items that refer to the same ingredient.

    Items are grouped by name plus descriptor; the first item of each group
    keeps its id and receives the merged quantity and recipe titles. The
    result is sorted by name (case- and accent-insensitive), ties keep their
    input order. Input items are never modified.

    Args:
        items: Shopping items in any order.

    Returns:
        New list of consolidated shopping items.
    """
    consolidated: dict[str, ShoppingItem] = {}

    for item in items:
        key = consolidation_key(item.name)

        if key in consolidated:
            consolidated[key] = merge_items(consolidated[key], item)
        else:
            consolidated[key] = replace(item, name=canonical_item_name(item.name))

    result = sorted(consolidated.values(), key=lambda entry: sort_key(entry.name))

    logger.debug(f"Consolidated shopping items into {len(result)} entries")
    return result


def items_from_ingredients(
    ingredients: Iterable[str],
    recipe_title: str | None = None,
    recipe_id: str | None = None,
) -> list[ShoppingItem]:
    """
    Turn raw ingredient lines from a generated recipe into shopping items.

    Each line becomes one unchecked item with a fresh id; quantities keep the
    unit as written so incompatible units can be listed losslessly.
    """
    items = []
    for line in ingredients:
        parsed = parse_ingredient(line)
        items.append(
            ShoppingItem(
                name=parsed.display_name,
                quantity=parsed.display_quantity,
                recipe_id=recipe_id,
                recipe_title=recipe_title,
            )
        )
    return items


def is_special_item(item: ShoppingItem) -> bool:
    """True for items without a numeric quantity (to taste or empty)."""
    quantity = (item.quantity or "").strip()
    return not quantity or isinstance(parse_quantity(quantity), ToTaste)


def format_item(item: ShoppingItem) -> str:
    """
    Render an item as a single shopping-list line.

    "1000 g Carne Moída", "Sal a gosto", "Folhas de Louro"
    """
    if is_special_item(item):
        return f"{item.name} {(item.quantity or '').strip()}".strip()
    return f"{item.quantity} {item.name}".strip()


def format_lines(items: Sequence[ShoppingItem]) -> list[str]:
    """Display lines with quantified items first and to-taste items after them."""
    quantified = [format_item(item) for item in items if not is_special_item(item)]
    special = [format_item(item) for item in items if is_special_item(item)]
    return quantified + special


def consolidate_ingredients(
    ingredients: Sequence[str],
    recipe_title: str | None = None,
) -> list[str]:
    """
    Consolidate raw ingredient lines into display lines.

    Quantified ingredients come first, sorted by name; to-taste and
    unquantified ingredients follow, also sorted by name.
    """
    return format_lines(consolidate(items_from_ingredients(ingredients, recipe_title)))

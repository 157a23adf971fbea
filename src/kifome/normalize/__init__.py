"""Parse and normalize free-form ingredient lines."""

from kifome.normalize.names import normalize_name
from kifome.normalize.parser import (
    TO_TASTE_UNIT,
    ParsedIngredient,
    clean_ingredient_string,
    has_quantity,
    parse_ingredient,
)
from kifome.normalize.quantity import (
    FreeText,
    Numeric,
    Quantity,
    ToTaste,
    from_decimal,
    parse_quantity,
    sum_quantities,
    to_decimal,
)
from kifome.normalize.units import canonicalize_unit

__all__ = [
    "TO_TASTE_UNIT",
    "FreeText",
    "Numeric",
    "ParsedIngredient",
    "Quantity",
    "ToTaste",
    "canonicalize_unit",
    "clean_ingredient_string",
    "from_decimal",
    "has_quantity",
    "normalize_name",
    "parse_ingredient",
    "parse_quantity",
    "sum_quantities",
    "to_decimal",
]

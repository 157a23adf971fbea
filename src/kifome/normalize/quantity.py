"""Quantity arithmetic on textual decimal, fractional and mixed-number values."""

import math
import re
from dataclasses import dataclass, field

from kifome.config import get_settings
from kifome.logging_config import get_logger
from kifome.normalize.units import canonicalize_unit, find_to_taste_marker

logger = get_logger(__name__)

# Denominators used in kitchen measures, searched in this order
FRACTION_DENOMINATORS: tuple[int, ...] = (2, 3, 4, 8)

# Maximum distance between a fraction and the true fractional part
FRACTION_TOLERANCE = 0.01

# Quantity token as it appears at the start of an ingredient line:
# mixed ("2 + 1/2", "2 1/2"), fraction ("3/4") or decimal ("2", "2.5", "2,5")
QUANTITY_PATTERN = (
    r"\d+\s*\+\s*\d+\s*/\s*\d+"
    r"|\d+\s+\d+\s*/\s*\d+"
    r"|\d+\s*/\s*\d+"
    r"|\d+(?:[.,]\d+)?"
)

_DECIMAL_RE = re.compile(r"^-?\d+(?:[.,]\d+)?$")
_FRACTION_RE = re.compile(r"^(-?\d+)\s*/\s*(\d+)$")
_MIXED_RE = re.compile(r"^(-?\d+)\s*(?:\+\s*|\s)(\d+)\s*/\s*(\d+)$")
_LEADING_NUMBER_RE = re.compile(r"^\s*-?\d+(?:[.,]\d+)?")
_NUMERIC_QUANTITY_RE = re.compile(rf"^({QUANTITY_PATTERN})(?:\s*(.*))?$")


# =============================================================================
# Decimal <-> Text
# =============================================================================


def _fraction_to_decimal(numerator: str, denominator: str) -> float:
    denom = int(denominator)
    if denom == 0:
        return 0.0
    return int(numerator) / denom


def to_decimal(text: str | float | int | None) -> float:
    """
    Convert a textual quantity into a float.

    Handles formats like:
    - "2", "2.5", "2,5" (comma is a decimal point)
    - "3/4"
    - "2 + 3/4", "2 3/4"

    Anything else is read best-effort from its leading number and falls
    back to 0.0. Never raises.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)):
        try:
            value = float(text)
        except OverflowError:
            return 0.0
        return value if math.isfinite(value) else 0.0

    quantity_str = " ".join(str(text).split())
    value = 0.0

    try:
        if _DECIMAL_RE.match(quantity_str):
            value = float(quantity_str.replace(",", "."))
        elif fraction := _FRACTION_RE.match(quantity_str):
            value = _fraction_to_decimal(fraction.group(1), fraction.group(2))
        elif mixed := _MIXED_RE.match(quantity_str):
            value = int(mixed.group(1)) + _fraction_to_decimal(mixed.group(2), mixed.group(3))
        elif leading := _LEADING_NUMBER_RE.match(quantity_str):
            value = float(leading.group(0).strip().replace(",", "."))
        else:
            logger.debug(f"Unparseable quantity {quantity_str!r}, treating as 0")
    except (OverflowError, ValueError):
        # Digit runs too long for int() or too large for a float
        logger.debug(f"Quantity {quantity_str[:40]!r} out of range, treating as 0")
        return 0.0

    if not math.isfinite(value):
        return 0.0
    return value


def from_decimal(value: float) -> str:
    """
    Render a float as a kitchen-friendly quantity string.

    Integers are rendered verbatim. Other values are approximated by the first
    denominator in 2, 3, 4, 8 whose numerator lands within 0.01 of the
    fractional part, giving "whole + num/den" (or "num/den" when the whole
    part is zero). Values with no close fraction use two decimal places.

    Examples:
        1000.0 -> "1000"
        0.75 -> "3/4"
        2.5 -> "2 + 1/2"
        0.6 -> "0.60"
    """
    if not math.isfinite(value):
        return "0"

    if value == int(value):
        return str(int(value))

    whole = math.floor(value)
    fractional = value - whole

    for denominator in FRACTION_DENOMINATORS:
        numerator = round(fractional * denominator)
        if abs(fractional - numerator / denominator) < FRACTION_TOLERANCE:
            if numerator == 0:
                return str(whole)
            if numerator == denominator:
                return str(whole + 1)
            if whole:
                return f"{whole} + {numerator}/{denominator}"
            return f"{numerator}/{denominator}"

    return f"{value:.2f}"


def sum_quantities(a: str, b: str) -> str:
    """Add two textual quantities, keeping fractional notation where it fits."""
    return from_decimal(to_decimal(a) + to_decimal(b))


def format_quantity_text(text: str) -> str:
    """
    Re-space a quantity token for display.

    "2+1/2" -> "2 + 1/2", "1 / 2" -> "1/2"; other text is only trimmed.
    """
    text = " ".join(text.split())
    if "+" in text:
        return " + ".join(part.strip().replace(" ", "") for part in text.split("+"))
    return re.sub(r"\s*/\s*", "/", text)


# =============================================================================
# Tagged Quantity Variant
# =============================================================================


@dataclass(frozen=True)
class Numeric:
    """A number with an optional canonical unit ("" when unitless)."""

    amount: str
    unit: str = ""

    @property
    def value(self) -> float:
        return to_decimal(self.amount)


@dataclass(frozen=True)
class ToTaste:
    """A quantity with no fixed amount, such as "a gosto"."""

    marker: str = field(default_factory=lambda: get_settings().default_to_taste_marker)


@dataclass(frozen=True)
class FreeText:
    """Any quantity expression that is not a plain number and unit."""

    text: str


Quantity = Numeric | ToTaste | FreeText


def parse_quantity(text: str | None) -> Quantity:
    """
    Classify a display quantity string.

    Examples:
        "500 g" -> Numeric("500", "g")
        "2 dentes" -> Numeric("2", "dente")
        "Quanto baste" -> ToTaste("quanto baste")
        "200 ml, 1 xícara" -> FreeText("200 ml, 1 xícara")
    """
    text = " ".join((text or "").split())

    if marker := find_to_taste_marker(text):
        return ToTaste(marker)

    match = _NUMERIC_QUANTITY_RE.match(text)
    if match and "," not in (match.group(2) or ""):
        return Numeric(
            amount=format_quantity_text(match.group(1)),
            unit=canonicalize_unit(match.group(2)),
        )

    return FreeText(text)


def format_quantity(quantity: Quantity) -> str:
    """Render a tagged quantity back to its display string."""
    if isinstance(quantity, Numeric):
        return f"{quantity.amount} {quantity.unit}".strip()
    if isinstance(quantity, ToTaste):
        return quantity.marker
    return quantity.text

"""Parsing of free-form ingredient lines into structured records."""

import re
from dataclasses import dataclass

from kifome.logging_config import get_logger
from kifome.normalize.names import normalize_name
from kifome.normalize.quantity import QUANTITY_PATTERN, format_quantity_text
from kifome.normalize.units import (
    CONNECTIVE_PATTERN,
    KNOWN_UNIT_PATTERN,
    TO_TASTE_MARKERS,
    canonicalize_unit,
    find_to_taste_marker,
)

logger = get_logger(__name__)

# Unit token assigned to ingredients without a fixed quantity
TO_TASTE_UNIT = "to-taste"

# Trailing preparation notes that take part in ingredient identity,
# keyed by the form used in grouping keys
DESCRIPTORS: dict[str, str] = {
    "picado": r"picad[oa]s?",
    "cortado": r"cortad[oa]s?",
    "fatiado": r"fatiad[oa]s?",
    "ralado": r"ralad[oa]s?",
    "em cubos": r"em\s+cubos",
    "em rodelas": r"em\s+rodelas",
    "em fatias": r"em\s+fatias",
}

DESCRIPTOR_PATTERN = "|".join(DESCRIPTORS.values())

_DIGIT_LETTER_RE = re.compile(r"(\d)([^\W\d_])")

_HAS_QUANTITY_RE = re.compile(r"^\d+(?:[.,]\d+)?(?:\s*\+\s*\d+\s*/\s*\d+)?")

# quantity, optional unit, optional connective, name, optional descriptor.
# Unknown unit tokens are only accepted when a connective follows them
# ("2 latas de molho"), so "2 Cebola picada" keeps "Cebola" as the name.
_STRUCTURED_RE = re.compile(
    rf"^(?P<quantity>{QUANTITY_PATTERN})\s+"
    rf"(?:(?P<unit>{KNOWN_UNIT_PATTERN})\s+"
    rf"|(?P<other_unit>[^\d\s]+)\s+(?={CONNECTIVE_PATTERN}\s))?"
    rf"(?:{CONNECTIVE_PATTERN}\s+)?"
    rf"(?P<name>.+?)"
    rf"(?:,?\s+(?P<descriptor>{DESCRIPTOR_PATTERN}))?$",
    re.IGNORECASE,
)

_TRAILING_DESCRIPTOR_RE = re.compile(
    rf"^(?P<name>.+?),?\s+(?P<descriptor>{DESCRIPTOR_PATTERN})$",
    re.IGNORECASE,
)

_TO_TASTE_RE = re.compile(
    r"[\s,]*\(?\s*\b(?:" + "|".join(TO_TASTE_MARKERS) + r")\b\s*\)?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedIngredient:
    """A single ingredient line broken into quantity, unit, name and descriptor."""

    raw_text: str
    quantity: str
    unit: str
    name: str
    descriptor: str | None = None
    unit_text: str = ""  # unit token as written in the line
    marker: str = ""  # to-taste marker found in a special line

    @property
    def is_special(self) -> bool:
        """True for to-taste or unquantified ingredients."""
        return self.unit == TO_TASTE_UNIT

    @property
    def display_name(self) -> str:
        """Name followed by the descriptor, if any."""
        if self.descriptor:
            return f"{self.name} {self.descriptor}"
        return self.name

    @property
    def display_quantity(self) -> str:
        """Quantity with the unit as originally written."""
        if self.is_special:
            return self.marker
        return f"{self.quantity} {self.unit_text}".strip()

    @property
    def canonical_text(self) -> str:
        """Line rebuilt from the canonical parts; parses back to the same name and unit."""
        if self.is_special:
            return f"{self.name} {self.marker}".strip()
        if self.unit:
            return f"{self.quantity} {self.unit} de {self.display_name}"
        return f"{self.quantity} {self.display_name}"

    @property
    def key(self) -> str:
        return build_key(self.name, self.descriptor)


def build_key(name: str, descriptor: str | None = None) -> str:
    """
    Build the grouping key: lowercase name plus canonical descriptor.

    "Alho", "picados" -> "alho picado"
    """
    return f"{name.lower()} {canonical_descriptor(descriptor)}"


def normalize_descriptor(descriptor: str | None) -> str | None:
    if not descriptor:
        return None
    return " ".join(descriptor.split()).lower()


def canonical_descriptor(descriptor: str | None) -> str:
    """Map gender and number variants of a descriptor to one form ("" for none)."""
    descriptor = normalize_descriptor(descriptor)
    if descriptor is None:
        return ""
    for canonical, pattern in DESCRIPTORS.items():
        if re.fullmatch(pattern, descriptor):
            return canonical
    return descriptor


def split_descriptor(name: str) -> tuple[str, str | None]:
    """
    Split a trailing preparation note off an ingredient name.

    "Cebola picada" -> ("Cebola", "picada")
    "Cebola" -> ("Cebola", None)
    """
    name = " ".join(name.split())
    match = _TRAILING_DESCRIPTOR_RE.match(name)
    if not match:
        return name, None
    return match.group("name"), normalize_descriptor(match.group("descriptor"))


def clean_ingredient_string(text: str | None) -> str:
    """
    Normalize spacing in an ingredient line.

    "500g  Carne moída " -> "500 g Carne moída"
    """
    if not text:
        return ""
    text = _DIGIT_LETTER_RE.sub(r"\1 \2", text)
    return " ".join(text.split())


def has_quantity(text: str) -> bool:
    """Check whether a cleaned ingredient line starts with a quantity."""
    return bool(_HAS_QUANTITY_RE.match(text.strip()))


def is_to_taste(text: str) -> bool:
    """Check whether an ingredient line carries a to-taste marker."""
    return bool(find_to_taste_marker(text))


def _parse_special(raw: str, line: str) -> ParsedIngredient:
    marker = find_to_taste_marker(line)
    name = normalize_name(_TO_TASTE_RE.sub("", line).strip(" ,")) or normalize_name(line)

    return ParsedIngredient(
        raw_text=raw,
        quantity="",
        unit=TO_TASTE_UNIT,
        name=name,
        marker=marker,
    )


def parse_ingredient(raw: str | None) -> ParsedIngredient:
    """
    Parse a free-form ingredient line.

    Lines without a leading quantity, or with a to-taste marker, become
    special ingredients (unit "to-taste"). Lines that start with a quantity
    but do not fit the expected shape fall back to quantity "1" and the
    normalized full line as name. Never raises.

    Examples:
        "500g Carne moída" -> ("500", "g", "Carne Moída", None)
        "2 dentes de alho picados" -> ("2", "dente", "Alho", "picados")
        "Sal a gosto" -> ("", "to-taste", "Sal", None)
    """
    raw = raw or ""
    line = clean_ingredient_string(raw)

    if not has_quantity(line) or is_to_taste(line):
        return _parse_special(raw, line)

    match = _STRUCTURED_RE.match(line)
    if not match:
        logger.debug(f"Ingredient line {line!r} did not match, keeping it as a literal item")
        return ParsedIngredient(
            raw_text=raw,
            quantity="1",
            unit="",
            name=normalize_name(line),
        )

    unit_text = match.group("unit") or match.group("other_unit") or ""

    return ParsedIngredient(
        raw_text=raw,
        quantity=format_quantity_text(match.group("quantity")),
        unit=canonicalize_unit(unit_text),
        name=normalize_name(match.group("name")),
        descriptor=normalize_descriptor(match.group("descriptor")),
        unit_text=" ".join(unit_text.split()),
    )

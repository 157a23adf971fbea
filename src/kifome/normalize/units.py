"""Unit vocabulary and canonicalization for Portuguese recipe measures."""

import re

# =============================================================================
# Unit Synonym Tables
# =============================================================================

# Synonym (lowercase) -> canonical unit token
UNIT_SYNONYMS: dict[str, str] = {
    # Weight
    "g": "g",
    "grama": "g",
    "gramas": "g",
    "kg": "kg",
    "quilo": "kg",
    "quilos": "kg",
    # Volume
    "ml": "mL",
    "mililitro": "mL",
    "mililitros": "mL",
    "l": "L",
    "litro": "L",
    "litros": "L",
    "xícara": "xícara",
    "xícaras": "xícara",
    "xicara": "xícara",
    "xicaras": "xícara",
    # Spoons
    "colher": "colher",
    "colheres": "colher",
    "colher de sopa": "colher (sopa)",
    "colheres de sopa": "colher (sopa)",
    "colher de sobremesa": "colher (sobremesa)",
    "colheres de sobremesa": "colher (sobremesa)",
    "colher de chá": "colher (chá)",
    "colheres de chá": "colher (chá)",
    "colher de cha": "colher (chá)",
    "colheres de cha": "colher (chá)",
    "colher (sopa)": "colher (sopa)",
    "colher (sobremesa)": "colher (sobremesa)",
    "colher (chá)": "colher (chá)",
    # Count
    "un": "un",
    "unidade": "un",
    "unidades": "un",
    "dente": "dente",
    "dentes": "dente",
    "maço": "maço",
    "maços": "maço",
    "maco": "maço",
    "macos": "maço",
}

# Markers for ingredients without a fixed quantity
TO_TASTE_MARKERS: tuple[str, ...] = ("a gosto", "quanto baste")

# Connectives that may sit between a unit and the ingredient name
UNIT_CONNECTIVES: tuple[str, ...] = ("de", "do", "da", "dos", "das")

# Longest synonyms first so "colheres de sopa" wins over "colheres"
_UNIT_ALTERNATION = "|".join(
    re.escape(unit) for unit in sorted(UNIT_SYNONYMS, key=len, reverse=True)
)

# Matches a known unit as a whole word (used inside larger patterns)
KNOWN_UNIT_PATTERN = rf"(?:{_UNIT_ALTERNATION})(?![^\W\d_])"

CONNECTIVE_PATTERN = rf"(?:{'|'.join(UNIT_CONNECTIVES)})"


def canonicalize_unit(unit: str | None) -> str:
    """
    Map a unit synonym to its canonical token.

    Lookup is exact and case-insensitive on the whitespace-collapsed token;
    unknown tokens are returned unchanged.

    Examples:
        "gramas" -> "g"
        "Dentes" -> "dente"
        "ml" -> "mL"
        "latas" -> "latas"
    """
    if not unit:
        return ""

    token = " ".join(unit.split())
    return UNIT_SYNONYMS.get(token.lower(), token)


def is_known_unit(unit: str | None) -> bool:
    """Check whether a token belongs to the known unit vocabulary."""
    if not unit:
        return False
    return " ".join(unit.split()).lower() in UNIT_SYNONYMS


def find_to_taste_marker(text: str | None) -> str:
    """Return the first to-taste marker contained in the text, or ''."""
    if not text:
        return ""

    lowered = text.lower()
    for marker in TO_TASTE_MARKERS:
        if marker in lowered:
            return marker
    return ""

"""Ingredient name canonicalization."""

import re

from kifome.normalize.quantity import QUANTITY_PATTERN
from kifome.normalize.units import CONNECTIVE_PATTERN, KNOWN_UNIT_PATTERN, is_known_unit

# Words kept lowercase unless they start the name
LOWERCASE_WORDS: frozenset[str] = frozenset(
    {"de", "do", "da", "dos", "das", "para", "em", "com", "e", "ou"}
)

# Names returned verbatim with their own casing
PROPER_NOUNS: tuple[str, ...] = (
    "Hortelã",
    "Sour cream",
    "Cream cheese",
)

_PROPER_NOUN_LOOKUP = {noun.lower(): noun for noun in PROPER_NOUNS}

# "500 g de ", "2 + 1/2 xícaras de ", "3 "
_LEADING_MEASURE_RE = re.compile(
    rf"^(?:{QUANTITY_PATTERN})\s+(?:{KNOWN_UNIT_PATTERN}\s+)?(?:{CONNECTIVE_PATTERN}\s+)?",
    re.IGNORECASE,
)


def strip_leading_measure(text: str) -> str:
    """
    Remove leading quantity/unit/connective phrases from an ingredient line.

    Stripping repeats while a measure is found, but never leaves an empty
    string or a bare unit behind.
    """
    text = " ".join(text.split())

    while match := _LEADING_MEASURE_RE.match(text):
        remainder = text[match.end():].strip()
        if not remainder or is_known_unit(remainder):
            break
        text = remainder

    return text


def capitalize_words(name: str) -> str:
    """
    Capitalize every word except connectives that are not the first word.

    "molho de tomate" -> "Molho de Tomate"
    """
    words = name.lower().split(" ")
    return " ".join(
        word if index and word in LOWERCASE_WORDS else word.capitalize()
        for index, word in enumerate(words)
    )


def normalize_name(raw: str | None) -> str:
    """
    Canonicalize an ingredient name.

    - Strip leading quantity, unit and connective ("500 g de carne" -> "carne")
    - Collapse whitespace
    - Proper nouns keep their fixed casing
    - Title-case the remaining words, connectives stay lowercase

    Idempotent: normalize_name(normalize_name(x)) == normalize_name(x).
    """
    if not raw:
        return ""

    name = strip_leading_measure(raw)
    if not name:
        return ""

    if proper := _PROPER_NOUN_LOOKUP.get(name.lower()):
        return proper

    return capitalize_words(name)

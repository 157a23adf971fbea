"""Unit tests for unit canonicalization and ingredient name normalization."""

import pytest

from kifome.normalize.names import capitalize_words, normalize_name, strip_leading_measure
from kifome.normalize.units import (
    canonicalize_unit,
    find_to_taste_marker,
    is_known_unit,
)

# =============================================================================
# Unit Canonicalization Tests
# =============================================================================


class TestCanonicalizeUnit:
    """Tests for canonicalize_unit function."""

    @pytest.mark.parametrize(
        "unit,expected",
        [
            ("g", "g"),
            ("grama", "g"),
            ("gramas", "g"),
            ("litro", "L"),
            ("litros", "L"),
            ("l", "L"),
            ("ml", "mL"),
            ("xícaras", "xícara"),
            ("xicara", "xícara"),
            ("colheres", "colher"),
            ("unidades", "un"),
            ("dentes", "dente"),
            ("maços", "maço"),
            ("macos", "maço"),
        ],
    )
    def test_synonyms(self, unit, expected):
        assert canonicalize_unit(unit) == expected

    def test_case_insensitive(self):
        """Test lookup ignores case."""
        assert canonicalize_unit("GRAMAS") == "g"
        assert canonicalize_unit("Dentes") == "dente"
        assert canonicalize_unit("ML") == "mL"

    def test_spoon_sizes(self):
        """Test spoon sizes keep their size in the canonical token."""
        assert canonicalize_unit("colheres de sopa") == "colher (sopa)"
        assert canonicalize_unit("colher de chá") == "colher (chá)"
        assert canonicalize_unit("colher (sopa)") == "colher (sopa)"

    def test_unknown_passes_through(self):
        """Test unknown tokens are returned unchanged."""
        assert canonicalize_unit("latas") == "latas"
        assert canonicalize_unit("Pacote") == "Pacote"

    def test_empty(self):
        assert canonicalize_unit("") == ""
        assert canonicalize_unit(None) == ""

    def test_canonical_is_fixed_point(self):
        """Test canonical tokens map to themselves."""
        for unit in ["g", "kg", "L", "mL", "xícara", "colher", "un", "dente", "maço"]:
            assert canonicalize_unit(unit) == unit

    def test_is_known_unit(self):
        assert is_known_unit("Xícaras")
        assert is_known_unit("colheres de sopa")
        assert not is_known_unit("latas")
        assert not is_known_unit("")


class TestToTasteMarker:
    """Tests for find_to_taste_marker function."""

    def test_markers(self):
        assert find_to_taste_marker("Sal a gosto") == "a gosto"
        assert find_to_taste_marker("Azeite QUANTO BASTE") == "quanto baste"

    def test_no_marker(self):
        assert find_to_taste_marker("500 g Carne") == ""
        assert find_to_taste_marker(None) == ""


# =============================================================================
# Name Normalization Tests
# =============================================================================


class TestNormalizeName:
    """Tests for normalize_name function."""

    def test_capitalizes_every_word(self):
        """Test multi-word names are title-cased."""
        assert normalize_name("carne moída") == "Carne Moída"
        assert normalize_name("ARROZ INTEGRAL") == "Arroz Integral"

    def test_connectives_stay_lowercase(self):
        """Test connectives are lowercase unless they come first."""
        assert normalize_name("molho de tomate") == "Molho de Tomate"
        assert normalize_name("peito DE frango com pele") == "Peito de Frango com Pele"
        assert normalize_name("sal e pimenta") == "Sal e Pimenta"
        assert normalize_name("de tudo um pouco") == "De Tudo Um Pouco"

    def test_strips_leading_measure(self):
        """Test leading quantity, unit and connective are removed."""
        assert normalize_name("500 g de carne moída") == "Carne Moída"
        assert normalize_name("2 xícaras de farinha de trigo") == "Farinha de Trigo"
        assert normalize_name("2 + 1/2 colheres de sopa de azeite") == "Azeite"
        assert normalize_name("3 ovos") == "Ovos"

    def test_strips_repeated_measures(self):
        assert normalize_name("2 2 ovos") == "Ovos"

    def test_never_strips_to_nothing(self):
        """Test a bare measure is kept rather than emptied."""
        assert normalize_name("500 g") == "500 G"
        assert normalize_name("2") == "2"

    def test_proper_nouns(self):
        """Test fixed exceptions keep their own casing."""
        assert normalize_name("cream cheese") == "Cream cheese"
        assert normalize_name("SOUR CREAM") == "Sour cream"
        assert normalize_name("hortelã") == "Hortelã"
        assert normalize_name("200 g de cream cheese") == "Cream cheese"

    def test_whitespace(self):
        assert normalize_name("  arroz   integral ") == "Arroz Integral"

    def test_empty(self):
        assert normalize_name("") == ""
        assert normalize_name(None) == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "carne moída",
            "500g de carne",
            "500 g",
            "2 2 ovos",
            "molho DE tomate",
            "Cream Cheese",
            "1/2 xícara de leite",
            "  ",
            "sal e pimenta a gosto",
            "(opcional) queijo",
            "pão-de-queijo",
        ],
    )
    def test_idempotent(self, raw):
        """Test normalizing twice gives the same result as once."""
        once = normalize_name(raw)
        assert normalize_name(once) == once


class TestHelpers:
    """Tests for name helper functions."""

    def test_strip_leading_measure(self):
        assert strip_leading_measure("500 g de carne") == "carne"
        assert strip_leading_measure("carne") == "carne"
        assert strip_leading_measure("1 xícara") == "1 xícara"

    def test_capitalize_words(self):
        assert capitalize_words("leite DE coco") == "Leite de Coco"

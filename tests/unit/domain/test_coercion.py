"""Tests for configuration value coercion."""

import pytest

from binconf.domain.coercion import coerce, coerce_bool, coerce_int, coerce_str
from binconf.domain.config import FieldKind


class TestCoerceBool:
    """Tests for coerce_bool."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "yes", "On", " on "])
    def test_true_words(self, value):
        assert coerce_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "False", "no", "OFF", "none"])
    def test_false_words(self, value):
        """Test that "false" means false, unlike plain string truthiness."""
        assert coerce_bool(value) is False

    def test_numbers(self):
        assert coerce_bool(0) is False
        assert coerce_bool(-1) is True
        assert coerce_bool(1) is True
        assert coerce_bool(0.0) is False

    def test_other_strings(self):
        assert coerce_bool("") is False
        assert coerce_bool("0") is False
        assert coerce_bool("1") is True
        assert coerce_bool("anything") is True

    def test_bool_passes_through(self):
        assert coerce_bool(True) is True
        assert coerce_bool(False) is False


class TestCoerceInt:
    """Tests for coerce_int."""

    def test_non_numeric_string_is_zero(self):
        assert coerce_int("bar") == 0
        assert coerce_int("") == 0

    def test_numeric_strings(self):
        assert coerce_int("300") == 300
        assert coerce_int(" -5 ") == -5
        assert coerce_int("+7") == 7

    def test_leading_digits(self):
        assert coerce_int("12abc") == 12

    def test_other_types(self):
        assert coerce_int(True) == 1
        assert coerce_int(False) == 0
        assert coerce_int(3.9) == 3
        assert coerce_int(42) == 42
        assert coerce_int(None) == 0

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_floats_are_zero(self, value):
        assert coerce_int(value) == 0


class TestCoerceStr:
    """Tests for coerce_str."""

    def test_renders_values(self):
        assert coerce_str("darkstrap") == "darkstrap"
        assert coerce_str(10) == "10"
        assert coerce_str(True) == "true"
        assert coerce_str(False) == "false"


class TestCoerce:
    """Tests for coerce dispatching on FieldKind."""

    def test_dispatches_by_kind(self):
        assert coerce(FieldKind.BOOL, "false", True) is False
        assert coerce(FieldKind.INT, "2048", 10) == 2048
        assert coerce(FieldKind.STRING, "page", "bootstrap") == "page"

    def test_empty_string_keeps_default(self):
        assert coerce(FieldKind.STRING, "", "bootstrap") == "bootstrap"

    def test_optional_string_taken_as_is(self):
        assert coerce(FieldKind.OPTIONAL_STRING, "sons-of-obsidian") == "sons-of-obsidian"
        assert coerce(FieldKind.OPTIONAL_STRING, "") == ""

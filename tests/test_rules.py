"""Tests for the required/default/minimum processing rules."""

from decimal import Decimal
from fractions import Fraction

import pytest

from hookchain.core.errors import InvalidFieldType, MissingRequiredField
from hookchain.validation.rules import (
    check_and_correct_minimum_values,
    check_required_keys,
    is_present,
    set_default_values,
)


# =============================================================================
# is_present
# =============================================================================


class TestIsPresent:
    @pytest.mark.parametrize(
        "value",
        [None, False, 0, 0.0, Decimal("0"), Fraction(0), float("nan"), "", [], (), set()],
    )
    def test_missing_kinds(self, value):
        assert is_present(value) is False

    @pytest.mark.parametrize(
        "value",
        ["alice", " ", 1, -1, 0.5, Fraction(1, 2), True, [0], ("a",), {}, {"a": 1}, object()],
    )
    def test_present_kinds(self, value):
        assert is_present(value) is True


# =============================================================================
# check_required_keys
# =============================================================================


class TestCheckRequiredKeys:
    def test_passes_when_all_present(self):
        check_required_keys({"a": "x", "b": [1]}, ["a", "b"])

    def test_no_required_keys(self):
        check_required_keys({}, [])

    def test_fails_on_absent_key_even_if_others_present(self):
        with pytest.raises(MissingRequiredField) as exc_info:
            check_required_keys({"b": "present"}, ["a", "b"])

        assert exc_info.value.field == "a"
        assert "a" in exc_info.value.message
        assert "b" in exc_info.value.message

    def test_message_lists_all_required_keys(self):
        with pytest.raises(MissingRequiredField) as exc_info:
            check_required_keys({"a": 1}, ["a", "b", "c"])

        assert str(exc_info.value) == "Params a, b, c are needed"
        assert exc_info.value.required_keys == ("a", "b", "c")
        assert exc_info.value.field == "b"

    def test_empty_list_fails(self):
        with pytest.raises(MissingRequiredField):
            check_required_keys({"tags": []}, ["tags"])

    def test_none_fails(self):
        with pytest.raises(MissingRequiredField):
            check_required_keys({"name": None}, ["name"])

    def test_zero_fails(self):
        with pytest.raises(MissingRequiredField):
            check_required_keys({"count": 0}, ["count"])

    def test_fractional_zero_fails(self):
        with pytest.raises(MissingRequiredField):
            check_required_keys({"n": Fraction(0)}, ["n"])

    def test_does_not_mutate(self):
        record = {"a": 1}
        check_required_keys(record, ["a"])
        assert record == {"a": 1}


# =============================================================================
# set_default_values
# =============================================================================


class TestSetDefaultValues:
    def test_sets_absent_keys(self):
        result = set_default_values({"name": "Test"}, {"status": "draft"})
        assert result == {"name": "Test", "status": "draft"}

    def test_keeps_existing_values(self):
        result = set_default_values({"status": "active"}, {"status": "draft"})
        assert result["status"] == "active"

    def test_falsy_existing_values_are_kept(self):
        record = {"count": 0, "flag": False, "label": "", "items": []}
        defaults = {"count": 5, "flag": True, "label": "x", "items": [1]}
        result = set_default_values(record, defaults)
        assert result == record

    def test_none_counts_as_absent(self):
        result = set_default_values({"status": None}, {"status": "draft"})
        assert result["status"] == "draft"

    def test_returns_copy(self):
        record = {"name": "Test"}
        result = set_default_values(record, {"status": "draft"})
        assert result is not record
        assert record == {"name": "Test"}

    def test_idempotent(self):
        defaults = {"status": "draft", "priority": 3}
        once = set_default_values({"priority": 1}, defaults)
        twice = set_default_values(once, defaults)
        assert once == twice == {"status": "draft", "priority": 1}

    def test_empty_defaults(self):
        assert set_default_values({"a": 1}, {}) == {"a": 1}


# =============================================================================
# check_and_correct_minimum_values
# =============================================================================


class TestCheckAndCorrectMinimumValues:
    def test_raises_value_below_floor(self):
        result = check_and_correct_minimum_values({"retries": -3}, {"retries": 0})
        assert result["retries"] == 0

    def test_sets_absent_value_to_floor(self):
        result = check_and_correct_minimum_values({}, {"retries": 2})
        assert result["retries"] == 2

    def test_explicit_none_is_not_floored(self):
        with pytest.raises(InvalidFieldType) as exc_info:
            check_and_correct_minimum_values({"retries": None}, {"retries": 0})

        assert exc_info.value.field == "retries"
        assert exc_info.value.value is None

    def test_fraction_values(self):
        result = check_and_correct_minimum_values({"ratio": Fraction(1, 3)}, {"ratio": 1})
        assert result["ratio"] == 1

    def test_keeps_value_at_floor(self):
        result = check_and_correct_minimum_values({"qty": 1}, {"qty": 1})
        assert result["qty"] == 1

    def test_keeps_value_above_floor(self):
        result = check_and_correct_minimum_values({"qty": 10.5}, {"qty": 1})
        assert result["qty"] == 10.5

    def test_nan_is_corrected(self):
        result = check_and_correct_minimum_values({"qty": float("nan")}, {"qty": 1})
        assert result["qty"] == 1

    def test_decimal_values(self):
        result = check_and_correct_minimum_values(
            {"price": Decimal("0.50")}, {"price": 1}
        )
        assert result["price"] == 1

    def test_none_minimums(self):
        assert check_and_correct_minimum_values({"a": 1}, None) == {"a": 1}

    def test_returns_copy(self):
        record = {"retries": -1}
        result = check_and_correct_minimum_values(record, {"retries": 0})
        assert result is not record
        assert record == {"retries": -1}

    def test_idempotent(self):
        floors = {"a": 0, "b": 5}
        once = check_and_correct_minimum_values({"a": -1, "b": 7}, floors)
        twice = check_and_correct_minimum_values(once, floors)
        assert once == twice == {"a": 0, "b": 7}

    def test_never_below_floor(self):
        floors = {"a": 0, "b": -2.5, "c": 100}
        for value in (-1000, -2.5, -2.6, 0, 99, 100, 101):
            result = check_and_correct_minimum_values(
                {"a": value, "b": value, "c": value}, floors
            )
            for key, floor in floors.items():
                assert result[key] >= floor

    @pytest.mark.parametrize("value", [None, "10", True, [1], {"n": 1}])
    def test_non_numeric_value_raises(self, value):
        with pytest.raises(InvalidFieldType) as exc_info:
            check_and_correct_minimum_values({"qty": value}, {"qty": 0})

        assert exc_info.value.field == "qty"
        assert exc_info.value.value == value
        assert exc_info.value.minimum == 0

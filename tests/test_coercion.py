"""Unit tests for id and field coercion."""

from __future__ import annotations

import math
from decimal import Decimal
from uuid import UUID

import pytest

from orm_es_connector.coercion import (
    coerce_field,
    coerce_id,
    is_present,
    string_form,
    to_number,
)
from orm_es_connector.schema import FieldType


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no string form")


class TestCoerceId:
    def test_string_is_returned_as_is(self) -> None:
        value = "abc-123"
        assert coerce_id(value) is value

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, "42"),
            (3.5, "3.5"),
            (UUID(int=1), "00000000-0000-0000-0000-000000000001"),
        ],
    )
    def test_non_strings_are_stringified(self, value, expected) -> None:
        assert coerce_id(value) == expected

    def test_none_is_returned_unchanged(self) -> None:
        assert coerce_id(None) is None

    def test_failed_conversion_falls_back_to_input(self) -> None:
        value = Unprintable()
        assert coerce_id(value) is value


class TestIsPresent:
    @pytest.mark.parametrize("value", [None, False, "", 0, 0.0, math.nan])
    def test_absent_values(self, value) -> None:
        assert is_present(value) is False

    @pytest.mark.parametrize("value", ["x", 1, -1, 0.5, True, [], {}, [0]])
    def test_present_values(self, value) -> None:
        assert is_present(value) is True


class TestCoerceField:
    def test_array_of_empty_value_is_empty_list(self) -> None:
        assert coerce_field(FieldType.ARRAY, []) == []
        assert coerce_field(FieldType.ARRAY, "") == []
        assert coerce_field(FieldType.ARRAY, None) == []

    def test_array_wraps_scalar_string_form(self) -> None:
        assert coerce_field(FieldType.ARRAY, "fantasy") == ["fantasy"]
        assert coerce_field(FieldType.ARRAY, 7) == ["7"]

    def test_array_wraps_whole_multi_value_as_one_element(self) -> None:
        # Elements are joined into a single string, not mapped one by one.
        assert coerce_field(FieldType.ARRAY, ["a", "b"]) == ["a,b"]

    def test_string(self) -> None:
        assert coerce_field(FieldType.STRING, 12) == "12"
        assert coerce_field(FieldType.STRING, "Bob") == "Bob"

    def test_number_parses_strings(self) -> None:
        assert coerce_field(FieldType.NUMBER, "12") == 12
        assert coerce_field(FieldType.NUMBER, " 2.5 ") == 2.5

    def test_number_keeps_numbers(self) -> None:
        assert coerce_field(FieldType.NUMBER, 7) == 7
        assert coerce_field(FieldType.NUMBER, Decimal("1.10")) == Decimal("1.10")

    def test_malformed_number_is_nan(self) -> None:
        assert math.isnan(coerce_field(FieldType.NUMBER, "abc"))

    def test_other_passes_through(self) -> None:
        value = {"nested": [1, 2]}
        assert coerce_field(FieldType.OTHER, value) is value


def test_string_form_joins_nested_sequences() -> None:
    assert string_form([1, [2, 3], None, "x"]) == "1,2,3,,x"


def test_to_number_of_non_numeric_types_is_nan() -> None:
    assert math.isnan(to_number({"a": 1}))
    assert to_number(True) == 1


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, "true"),
        (False, "false"),
        (5.0, "5"),
        (2.5, "2.5"),
        ([1.0, True], "1,true"),
    ],
)
def test_string_form_of_scalars(value, expected) -> None:
    assert string_form(value) == expected


def test_to_number_rejects_digit_group_underscores() -> None:
    assert math.isnan(to_number("1_000"))

"""Tests for per-type value coercion."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest

from metarest.exceptions import FilterParseError
from metarest.filters import RestFilter
from metarest.metadata import FieldDataType, FieldMetadata
from metarest.values import coerce_condition, coerce_record, coerce_value, key_of


def _field(kind: FieldDataType, scale: int = 0) -> FieldMetadata:
    return FieldMetadata(name="F", type=kind, scale=scale)


@pytest.mark.parametrize(
    ("kind", "scale", "raw", "expected"),
    [
        (FieldDataType.STRING, 0, 12, "12"),
        (FieldDataType.STRING, 0, True, "true"),
        (FieldDataType.NUMERIC, 0, "42", 42),
        (FieldDataType.NUMERIC, 0, Decimal("42.0"), 42),
        (FieldDataType.NUMERIC, 0, "4.5", Decimal("4.5")),
        (FieldDataType.NUMERIC, 0, True, 1),
        (FieldDataType.NUMERIC, 2, 3, Decimal(3)),
        (FieldDataType.NUMERIC, 2, 2.5, Decimal("2.5")),
        (FieldDataType.DATE, 0, "2024-02-29", date(2024, 2, 29)),
        (FieldDataType.DATE, 0, datetime(2024, 2, 29, 10, 30), date(2024, 2, 29)),
        (FieldDataType.DATETIME, 0, date(2024, 2, 29), datetime(2024, 2, 29)),
        (
            FieldDataType.DATETIME,
            0,
            "2024-02-29T10:30:00Z",
            datetime(2024, 2, 29, 10, 30, tzinfo=timezone.utc),
        ),
        (FieldDataType.TIME, 0, "08:15:00", time(8, 15)),
        (FieldDataType.BYTE_ARRAY, 0, "AP8=", b"\x00\xff"),
        (FieldDataType.BYTE_ARRAY, 0, bytearray(b"ab"), b"ab"),
    ],
)
def test_coerce_value(kind, scale, raw, expected):
    assert coerce_value(raw, _field(kind, scale)) == expected


@pytest.mark.parametrize(
    ("kind", "raw"),
    [
        (FieldDataType.STRING, {"a": 1}),
        (FieldDataType.NUMERIC, "ten"),
        (FieldDataType.NUMERIC, "NaN"),
        (FieldDataType.NUMERIC, [1]),
        (FieldDataType.DATE, "yesterday"),
        (FieldDataType.DATE, 20240229),
        (FieldDataType.TIME, "25:00"),
        (FieldDataType.BYTE_ARRAY, "not base64!"),
    ],
)
def test_coerce_value_rejects(kind, raw):
    with pytest.raises(ValueError):
        coerce_value(raw, _field(kind))


def test_none_and_unknown_fields_pass_through():
    assert coerce_value(None, _field(FieldDataType.NUMERIC)) is None
    assert coerce_value({"raw": 1}, None) == {"raw": 1}


def test_coerce_record_keeps_unknown_keys(employee_metadata):
    record = coerce_record({"Id": "5", "Extra": "x"}, employee_metadata)

    assert record == {"Id": 5, "Extra": "x"}


def test_key_of(employee_metadata):
    assert key_of({"Id": 3, "Name": "dan"}, employee_metadata) == (3,)
    assert key_of({"Name": "dan"}, employee_metadata) == (None,)


class TestCoerceCondition:
    def test_valueless_operators(self):
        node = RestFilter.leaf("F", "isnull", "ignored")

        assert coerce_condition(node, _field(FieldDataType.NUMERIC)) is None

    def test_pattern_operators_keep_text(self):
        node = RestFilter.leaf("F", "startswith", 31)

        assert coerce_condition(node, _field(FieldDataType.NUMERIC)) == "31"

    def test_comparison_is_coerced(self):
        node = RestFilter.leaf("F", "lt", "2024-01-01")

        assert coerce_condition(node, _field(FieldDataType.DATE)) == date(2024, 1, 1)

    def test_uncoercible_value(self):
        node = RestFilter.leaf("F", "eq", "abc")

        with pytest.raises(FilterParseError) as exc_info:
            coerce_condition(node, _field(FieldDataType.NUMERIC))

        assert list(exc_info.value.errors) == ["F"]

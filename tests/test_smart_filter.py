"""Tests for smart-filter parsing and expansion."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from metarest.filters import (
    FilterLogic,
    FilterOperator,
    SmartFilter,
    parse_smart_filter,
)
from metarest.metadata import FieldDataType, FieldMetadata


class TestParseSmartFilter:
    def test_range_requires_spaced_separator(self):
        smart = parse_smart_filter("10-20")

        assert smart.min_num is None
        assert smart.max_num is None
        assert smart.min_date is None

    def test_numeric_range(self):
        smart = parse_smart_filter("10 - 20")

        assert smart.min_num == Decimal(10)
        assert smart.max_num == Decimal(20)

    def test_numeric_range_is_ordered(self):
        smart = parse_smart_filter("20 - 10")

        assert (smart.min_num, smart.max_num) == (Decimal(10), Decimal(20))

    def test_date_range(self):
        smart = parse_smart_filter("2024-01-01 - 2024-01-31")

        assert smart.min_date == date(2024, 1, 1)
        assert smart.max_date == date(2024, 1, 31)
        assert smart.min_num is None

    def test_date_range_keeps_left_as_lower_bound(self):
        smart = parse_smart_filter("2024-01-31 - 2024-01-01")

        assert smart.min_date == date(2024, 1, 31)
        assert smart.max_date == date(2024, 1, 1)

    def test_single_number(self):
        smart = parse_smart_filter("42")

        assert smart.min_num == Decimal(42)
        assert smart.max_num is None
        assert smart.min_date is None

    def test_single_date(self):
        smart = parse_smart_filter("2023-06-30")

        assert smart.min_date == date(2023, 6, 30)
        assert smart.max_date is None

    def test_plain_text(self):
        smart = parse_smart_filter("anna")

        assert not smart.has_num_range
        assert not smart.has_date_range
        assert smart.min_num is None
        assert smart.min_date is None


FIELDS = [
    FieldMetadata(name="Id", type=FieldDataType.NUMERIC),
    FieldMetadata(name="Name", type=FieldDataType.STRING),
    FieldMetadata(name="HireDate", type=FieldDataType.DATE),
    FieldMetadata(name="StartTime", type=FieldDataType.TIME),
    FieldMetadata(name="Photo", type=FieldDataType.BYTE_ARRAY),
]


class TestComposeSmartFilter:
    def test_empty_text_yields_nothing(self):
        assert SmartFilter("").compose_filter(FIELDS) is None
        assert SmartFilter(None).compose_filter(FIELDS) is None

    def test_text_matches_string_fields_only(self):
        node = SmartFilter("anna").compose_filter(FIELDS)

        assert not node.is_composite
        assert node.field == "Name"
        assert node.operator is FilterOperator.CONTAINS
        assert node.value == "anna"
        assert node.ignore_case is True

    def test_number_matches_string_and_numeric_fields(self):
        node = SmartFilter("42").compose_filter(FIELDS)

        assert node.logic is FilterLogic.OR
        id_leaf, name_leaf = node.filters
        assert (id_leaf.field, id_leaf.operator, id_leaf.value) == (
            "Id",
            FilterOperator.EQ,
            Decimal(42),
        )
        assert name_leaf.field == "Name"

    def test_numeric_range_becomes_between(self):
        node = SmartFilter("10 - 20").compose_filter(FIELDS)

        between = node.filters[0]
        assert between.logic is FilterLogic.AND
        assert [c.operator for c in between.filters] == [
            FilterOperator.GTE,
            FilterOperator.LTE,
        ]
        assert [c.value for c in between.filters] == [Decimal(10), Decimal(20)]

    def test_date_range_targets_date_fields(self):
        node = SmartFilter("2024-01-01 - 2024-01-31").compose_filter(FIELDS)

        targeted = {
            child.filters[0].field if child.is_composite else child.field
            for child in node.filters
        }
        assert targeted == {"Name", "HireDate"}

    def test_no_matching_field_yields_nothing(self):
        fields = [FieldMetadata(name="Photo", type=FieldDataType.BYTE_ARRAY)]

        assert SmartFilter("42").compose_filter(fields) is None

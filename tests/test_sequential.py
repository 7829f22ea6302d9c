"""Tests for record operators, the record predicate compiler and sorting."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from metarest.exceptions import FilterParseError
from metarest.filters import FilterLogic, FilterOperator, RestFilter
from metarest.metadata import FieldDataType, FieldMetadata
from metarest.parameters import RestSort, SortDirection, SortField
from metarest.sequential import build_record_predicate, sort_records
from metarest.sequential.operators import build_default_registry
from metarest.sequential.operators.standard import EqualOperator


def _ids(records, node, fields, **kwargs) -> list[int]:
    predicate = build_record_predicate(node, fields, **kwargs)
    return [r["Id"] for r in records if predicate(r)]


# ── Operators ────────────────────────────────────────────────────────


class TestRecordOperators:
    def test_default_registry_covers_every_operator(self, registry):
        assert registry.supported_operators == set(FilterOperator)

    def test_unregistered_operator(self, registry):
        registry.unregister(FilterOperator.EQ)

        assert not registry.has(FilterOperator.EQ)
        with pytest.raises(ValueError):
            registry.evaluate(FilterOperator.EQ, 1, 1)

    @pytest.mark.parametrize(
        ("operator", "field_value", "condition", "expected"),
        [
            (FilterOperator.EQ, 3, 3, True),
            (FilterOperator.NEQ, 3, 4, True),
            (FilterOperator.LT, date(2020, 1, 1), date(2021, 1, 1), True),
            (FilterOperator.LTE, Decimal("2.50"), Decimal("2.5"), True),
            (FilterOperator.GT, "b", "a", True),
            (FilterOperator.GTE, 1, 2, False),
            (FilterOperator.STARTSWITH, "Joan", "Jo", True),
            (FilterOperator.ENDSWITH, "Joan", "an", True),
            (FilterOperator.CONTAINS, "Brian", "ia", True),
            (FilterOperator.DOES_NOT_CONTAIN, "Brian", "ia", False),
            (FilterOperator.IS_NULL, None, None, True),
            (FilterOperator.IS_NOT_NULL, "", None, True),
            (FilterOperator.IS_EMPTY, "", None, True),
            (FilterOperator.IS_NOT_EMPTY, "x", None, True),
        ],
    )
    def test_evaluate(self, registry, operator, field_value, condition, expected):
        assert registry.evaluate(operator, field_value, condition) is expected

    @pytest.mark.parametrize(
        "operator",
        [
            FilterOperator.EQ,
            FilterOperator.NEQ,
            FilterOperator.LT,
            FilterOperator.GT,
            FilterOperator.CONTAINS,
            FilterOperator.DOES_NOT_CONTAIN,
            FilterOperator.IS_EMPTY,
            FilterOperator.IS_NOT_EMPTY,
        ],
    )
    def test_null_field_value_matches_nothing(self, registry, operator):
        assert registry.evaluate(operator, None, "x") is False

    def test_null_condition_never_matches(self, registry):
        assert registry.evaluate(FilterOperator.EQ, "x", None) is False
        assert registry.evaluate(FilterOperator.NEQ, "x", None) is False

    def test_ignore_case(self, registry):
        assert registry.evaluate(FilterOperator.EQ, "ANNA", "anna", True)
        assert not registry.evaluate(FilterOperator.EQ, "ANNA", "anna")
        assert registry.evaluate(FilterOperator.STARTSWITH, "Joan", "jO", True)

    def test_incomparable_types_do_not_match(self):
        assert EqualOperator().evaluate(1, "1") is False
        assert build_default_registry().evaluate(FilterOperator.LT, 1, "a") is False


# ── Predicate compiler ───────────────────────────────────────────────


class TestRecordPredicate:
    def test_no_filter_accepts_everything(self, employee_records, employee_metadata):
        assert _ids(employee_records, None, employee_metadata.fields) == [1, 2, 3, 4, 5]

    def test_condition_is_coerced_to_field_type(
        self, employee_records, employee_metadata
    ):
        fields = employee_metadata.fields

        assert _ids(employee_records, RestFilter.leaf("Id", "eq", "3"), fields) == [3]
        assert _ids(
            employee_records, RestFilter.leaf("Salary", "gt", 3000), fields
        ) == [1, 3, 5]
        assert _ids(
            employee_records, RestFilter.leaf("HireDate", "lt", "2020-01-01"), fields
        ) == [3, 5]

    def test_contains_is_case_sensitive_unless_ignore_case(
        self, employee_records, employee_metadata
    ):
        fields = employee_metadata.fields
        sensitive = RestFilter.leaf("Name", "contains", "an")
        insensitive = RestFilter.leaf("Name", "contains", "an", ignore_case=True)

        assert _ids(employee_records, sensitive, fields) == [2, 3, 4]
        assert _ids(employee_records, insensitive, fields) == [1, 2, 3, 4]

    def test_pattern_operators_on_numbers_compare_text(
        self, employee_records, employee_metadata
    ):
        node = RestFilter.leaf("Salary", "startswith", "31")

        assert _ids(employee_records, node, employee_metadata.fields) == [1]

    def test_and_or(self, employee_records, employee_metadata):
        node = RestFilter.composite(
            FilterLogic.OR,
            RestFilter.leaf("Name", "startswith", "Jo"),
            RestFilter.composite(
                FilterLogic.AND,
                RestFilter.leaf("Id", "gte", 2),
                RestFilter.leaf("Salary", "lt", "3000"),
            ),
        )

        assert _ids(employee_records, node, employee_metadata.fields) == [2, 4]

    def test_only_first_two_children_by_default(
        self, employee_records, employee_metadata, caplog
    ):
        node = RestFilter.composite(
            FilterLogic.OR,
            RestFilter.leaf("Id", "eq", 1),
            RestFilter.leaf("Id", "eq", 2),
            RestFilter.leaf("Id", "eq", 3),
        )

        with caplog.at_level(logging.WARNING, logger="metarest.sequential"):
            ids = _ids(employee_records, node, employee_metadata.fields)

        assert ids == [1, 2]
        assert any("only the first 2" in r.getMessage() for r in caplog.records)

    def test_evaluate_all_children(self, employee_records, employee_metadata, caplog):
        node = RestFilter.composite(
            FilterLogic.OR,
            RestFilter.leaf("Id", "eq", 1),
            RestFilter.leaf("Id", "eq", 2),
            RestFilter.leaf("Id", "eq", 3),
        )

        with caplog.at_level(logging.WARNING, logger="metarest.sequential"):
            ids = _ids(
                employee_records,
                node,
                employee_metadata.fields,
                evaluate_all_children=True,
            )

        assert ids == [1, 2, 3]
        assert not caplog.records

    def test_null_children_are_skipped(self, employee_records, employee_metadata):
        node = RestFilter.composite(
            FilterLogic.AND, None, RestFilter.leaf("Id", "eq", 4)
        )

        assert _ids(employee_records, node, employee_metadata.fields) == [4]

    def test_composite_of_only_null_children(self, employee_records, employee_metadata):
        fields = employee_metadata.fields

        assert _ids(
            employee_records, RestFilter.composite(FilterLogic.AND, None), fields
        ) == [1, 2, 3, 4, 5]
        assert _ids(
            employee_records, RestFilter.composite(FilterLogic.OR, None), fields
        ) == []

    def test_null_field_value_semantics(self):
        fields = [
            FieldMetadata(name="Id", type=FieldDataType.NUMERIC, is_primary_key=True),
            FieldMetadata(name="Nick", type=FieldDataType.STRING),
        ]
        records = [{"Id": 1, "Nick": None}, {"Id": 2, "Nick": ""}, {"Id": 3, "Nick": "x"}]

        assert _ids(records, RestFilter.leaf("Nick", "isnull"), fields) == [1]
        assert _ids(records, RestFilter.leaf("Nick", "isnotnull"), fields) == [2, 3]
        assert _ids(records, RestFilter.leaf("Nick", "isempty"), fields) == [2]
        assert _ids(records, RestFilter.leaf("Nick", "isnotempty"), fields) == [3]
        assert _ids(records, RestFilter.leaf("Nick", "neq", "x"), fields) == [2]
        assert _ids(records, RestFilter.leaf("Nick", "doesnotcontain", "x"), fields) == [2]

    def test_uncoercible_condition_raises(self, employee_metadata):
        with pytest.raises(FilterParseError) as exc_info:
            build_record_predicate(
                RestFilter.leaf("HireDate", "eq", "not a date"), employee_metadata.fields
            )

        assert "HireDate" in exc_info.value.errors

    def test_unsupported_operator_raises(self, registry, employee_metadata):
        registry.unregister(FilterOperator.CONTAINS)

        with pytest.raises(FilterParseError):
            build_record_predicate(
                RestFilter.leaf("Name", "contains", "a"),
                employee_metadata.fields,
                registry=registry,
            )


# ── Sorting ──────────────────────────────────────────────────────────


def _sort(*fields: tuple[str, SortDirection]) -> RestSort:
    return RestSort(fields=[SortField(field=f, direction=d) for f, d in fields])


class TestSortRecords:
    def test_single_field_descending(self, employee_records, employee_metadata):
        ordered = sort_records(
            employee_records,
            _sort(("Salary", SortDirection.DESCENDING)),
            employee_metadata.fields,
        )

        assert [r["Id"] for r in ordered] == [5, 3, 1, 2, 4]

    def test_strings_compare_ordinally(self, employee_records, employee_metadata):
        ordered = sort_records(
            employee_records,
            _sort(("Name", SortDirection.ASCENDING)),
            employee_metadata.fields,
        )

        assert [r["Name"] for r in ordered] == ["Anna", "Brian", "Joan", "Zoe", "dan"]

    def test_multiple_fields_and_nulls(self):
        fields = [
            FieldMetadata(name="Id", type=FieldDataType.NUMERIC),
            FieldMetadata(name="Dept", type=FieldDataType.STRING),
        ]
        records = [
            {"Id": 1, "Dept": "B"},
            {"Id": 2, "Dept": None},
            {"Id": 3, "Dept": "A"},
            {"Id": 4, "Dept": "B"},
        ]

        ascending = sort_records(
            records,
            _sort(("Dept", SortDirection.ASCENDING), ("Id", SortDirection.DESCENDING)),
            fields,
        )
        descending = sort_records(
            records, _sort(("Dept", SortDirection.DESCENDING)), fields
        )

        assert [r["Id"] for r in ascending] == [3, 4, 1, 2]
        assert [r["Id"] for r in descending] == [2, 1, 4, 3]

    def test_unknown_fields_are_skipped(self, employee_metadata):
        records = [
            {"Id": 2, "Extra": "b"},
            {"Id": 1, "Extra": 7},
            {"Id": 3, "Extra": None},
        ]

        only_unknown = sort_records(
            records, _sort(("Extra", SortDirection.ASCENDING)), employee_metadata.fields
        )
        mixed = sort_records(
            records,
            _sort(("Extra", SortDirection.ASCENDING), ("Id", SortDirection.ASCENDING)),
            employee_metadata.fields,
        )

        assert [r["Id"] for r in only_unknown] == [2, 1, 3]
        assert [r["Id"] for r in mixed] == [1, 2, 3]

    def test_empty_sort_keeps_order(self, employee_records, employee_metadata):
        ordered = sort_records(employee_records, RestSort(), employee_metadata.fields)

        assert [r["Id"] for r in ordered] == [1, 2, 3, 4, 5]

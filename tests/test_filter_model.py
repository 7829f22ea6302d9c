"""Tests for the RestFilter tree, cloning and between_filter."""

from __future__ import annotations

import pydantic
import pytest

from metarest.exceptions import OperatorNotFoundError
from metarest.filters import FilterLogic, FilterOperator, RestFilter, between_filter


def test_leaf_from_wire_form():
    node = RestFilter.model_validate(
        {"field": "Name", "operator": "Contains", "value": "an", "ignoreCase": True}
    )

    assert node.field == "Name"
    assert node.operator is FilterOperator.CONTAINS
    assert node.value == "an"
    assert node.ignore_case is True
    assert not node.is_composite


def test_composite_from_wire_form():
    node = RestFilter.model_validate(
        {
            "logic": "OR",
            "filters": [
                {"field": "Id", "operator": "eq", "value": 1},
                {"field": "Id", "operator": "eq", "value": 2},
            ],
        }
    )

    assert node.is_composite
    assert node.logic is FilterLogic.OR
    assert [c.value for c in node.filters] == [1, 2]


def test_composite_ignores_leaf_fields():
    node = RestFilter.model_validate(
        {
            "field": "Ignored",
            "operator": "eq",
            "logic": "and",
            "filters": [{"field": "Id", "operator": "gt", "value": 0}],
        }
    )
    assert node.is_composite


def test_unknown_operator_suggests_close_matches():
    with pytest.raises(OperatorNotFoundError) as exc_info:
        RestFilter.model_validate({"field": "Name", "operator": "contain", "value": "x"})

    assert "contains" in exc_info.value.suggestions
    assert exc_info.value.to_dict()["error"] == "OPERATOR_NOT_FOUND"


def test_leaf_requires_field_and_operator():
    with pytest.raises(pydantic.ValidationError):
        RestFilter.model_validate({"value": 3})


def test_clone_is_deep_and_keeps_null_children():
    original = RestFilter.composite(
        FilterLogic.AND,
        RestFilter.leaf("Id", FilterOperator.GT, 1),
        None,
        RestFilter.composite(FilterLogic.OR, RestFilter.leaf("Name", "eq", "Zoe")),
    )

    copy = original.clone()

    assert copy == original
    assert copy.filters[1] is None
    assert copy.filters[0] is not original.filters[0]
    assert copy.filters[2].filters[0] is not original.filters[2].filters[0]

    copy.filters[0].value = 99
    assert original.filters[0].value == 1


def test_between_filter_shape():
    node = between_filter("Salary", 10, 20)

    assert node.logic is FilterLogic.AND
    low, high = node.filters
    assert (low.field, low.operator, low.value) == ("Salary", FilterOperator.GTE, 10)
    assert (high.field, high.operator, high.value) == ("Salary", FilterOperator.LTE, 20)


@pytest.mark.parametrize(
    ("field", "low", "high"),
    [("", 1, 2), ("Id", None, 2), ("Id", 1, None)],
)
def test_between_filter_rejects_missing_arguments(field, low, high):
    with pytest.raises(ValueError):
        between_filter(field, low, high)


def test_to_dict_round_trips_through_validation():
    node = RestFilter.composite(
        FilterLogic.OR,
        RestFilter.leaf("Name", FilterOperator.STARTSWITH, "Jo", ignore_case=True),
        RestFilter.leaf("HireDate", FilterOperator.IS_NULL),
    )

    data = node.to_dict()

    assert data["logic"] == "or"
    assert data["filters"][0] == {
        "field": "Name",
        "operator": "startswith",
        "value": "Jo",
        "ignoreCase": True,
    }
    assert RestFilter.model_validate(data) == node

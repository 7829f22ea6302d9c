"""Standard comparison operators: eq, neq, lt, lte, gt, gte."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any

from ...filters import FilterOperator
from ..evaluator import RecordOperator

if TYPE_CHECKING:
    from collections.abc import Callable


def _fold(value: Any, ignore_case: bool) -> Any:
    if ignore_case and isinstance(value, str):
        return value.lower()
    return value


class _ComparisonOperator(RecordOperator):
    compare: Callable[[Any, Any], Any]

    def evaluate(
        self, field_value: Any, condition_value: Any, ignore_case: bool = False
    ) -> bool:
        if field_value is None or condition_value is None:
            return False
        try:
            return bool(
                type(self).compare(
                    _fold(field_value, ignore_case), _fold(condition_value, ignore_case)
                )
            )
        except TypeError:
            return False


class EqualOperator(_ComparisonOperator):
    compare = op_module.eq

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQ


class NotEqualOperator(_ComparisonOperator):
    compare = op_module.ne

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NEQ


class LessThanOperator(_ComparisonOperator):
    compare = op_module.lt

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LT


class LessEqualOperator(_ComparisonOperator):
    compare = op_module.le

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LTE


class GreaterThanOperator(_ComparisonOperator):
    compare = op_module.gt

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GT


class GreaterEqualOperator(_ComparisonOperator):
    compare = op_module.ge

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GTE

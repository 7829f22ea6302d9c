"""Standard comparison operators for SQLAlchemy."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import false, func

from ...filters import FilterOperator
from ..strategy import SQLOperator

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement


class _ComparisonOperator(SQLOperator):
    compare: Callable[[Any, Any], Any]

    def apply(
        self, column: Any, value: Any, ignore_case: bool = False
    ) -> ColumnElement[bool]:
        # A NULL comparand never matches, as in the record evaluator.
        if value is None:
            return false()
        if ignore_case and isinstance(value, str):
            return cast(
                "ColumnElement[bool]",
                type(self).compare(func.lower(column), func.lower(value)),
            )
        return cast("ColumnElement[bool]", type(self).compare(column, value))


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

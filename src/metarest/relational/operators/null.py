"""Null / empty check operators for SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import literal_column

from ...filters import FilterOperator
from ..strategy import SQLOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

EMPTY_STRING = "''"


class IsNullOperator(SQLOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NULL

    def apply(
        self, column: Any, _value: Any, ignore_case: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_(None))


class IsNotNullOperator(SQLOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_NULL

    def apply(
        self, column: Any, _value: Any, ignore_case: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_not(None))


class IsEmptyOperator(SQLOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_EMPTY

    def apply(
        self, column: Any, _value: Any, ignore_case: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column == literal_column(EMPTY_STRING))


class IsNotEmptyOperator(SQLOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_EMPTY

    def apply(
        self, column: Any, _value: Any, ignore_case: bool = False
    ) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column != literal_column(EMPTY_STRING))

"""Pattern-match operators for SQLAlchemy: LIKE with escaped wildcards."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import String, false, func
from sqlalchemy import cast as sql_cast

from ...filters import FilterOperator
from ..strategy import SQLOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

ESCAPE_CHAR = "/"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so *value* matches literally."""
    return (
        value.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2)
        .replace("%", ESCAPE_CHAR + "%")
        .replace("_", ESCAPE_CHAR + "_")
    )


def _as_text(column: Any) -> Any:
    if isinstance(getattr(column, "type", None), String):
        return column
    return sql_cast(column, String)


class _PatternOperator(SQLOperator):
    prefix = ""
    suffix = ""
    negate = False

    def apply(
        self, column: Any, value: Any, ignore_case: bool = False
    ) -> ColumnElement[bool]:
        if value is None:
            return false()
        pattern = f"{self.prefix}{escape_like(str(value))}{self.suffix}"
        target = _as_text(column)
        if ignore_case:
            target = func.lower(target)
            clause = (
                target.not_like(func.lower(pattern), escape=ESCAPE_CHAR)
                if self.negate
                else target.like(func.lower(pattern), escape=ESCAPE_CHAR)
            )
        elif self.negate:
            clause = target.not_like(pattern, escape=ESCAPE_CHAR)
        else:
            clause = target.like(pattern, escape=ESCAPE_CHAR)
        return cast("ColumnElement[bool]", clause)


class StartsWithOperator(_PatternOperator):
    suffix = "%"

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.STARTSWITH


class EndsWithOperator(_PatternOperator):
    prefix = "%"

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.ENDSWITH


class ContainsOperator(_PatternOperator):
    prefix = "%"
    suffix = "%"

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS


class DoesNotContainOperator(_PatternOperator):
    prefix = "%"
    suffix = "%"
    negate = True

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.DOES_NOT_CONTAIN

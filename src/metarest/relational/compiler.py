"""
Compile a filter tree into a SQLAlchemy predicate, and compose the
fetch query around it.

Uses the strategy pattern: each operator is an isolated class in
``operators/``, registered in a ``SQLOperatorRegistry``.  The
``build_sql_filter`` function walks the tree (any number of children
per composite node) and delegates leaf compilation to the registry.

Query composition
-----------------
``apply_sort`` orders by the requested fields, falling back to the
first column so that pagination is deterministic.  ``apply_pagination``
applies ``skip`` then ``take`` (no limit when ``take`` is 0).
``build_count`` wraps the filtered, unsorted query in
``SELECT count(*) FROM (...)``.

``render_fragment`` renders any clause to SQL text plus its ordered
positional parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    LargeBinary,
    MetaData,
    Numeric,
    String,
    Table,
    Time,
    and_,
    false,
    func,
    or_,
    select,
    true,
)
from sqlalchemy.dialects import sqlite

from ..exceptions import FilterParseError
from ..filters import FilterLogic
from ..metadata import FieldDataType
from ..values import coerce_condition
from .operators import DEFAULT_SQL_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.engine import Dialect
    from sqlalchemy.types import TypeEngine

    from ..filters import RestFilter
    from ..metadata import EntityMetadata, FieldMetadata
    from ..parameters import RestParameters, RestSort
    from .strategy import SQLOperatorRegistry

logger = logging.getLogger("metarest.relational")


@dataclass(frozen=True)
class SqlFragment:
    """Rendered SQL text and its positional parameters, in placeholder order."""

    sql: str
    parameters: list[Any] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Table construction
# ---------------------------------------------------------------------------


def sql_type(field_metadata: FieldMetadata) -> TypeEngine[Any]:
    """SQLAlchemy type used to bind and read values of *field_metadata*."""
    kind = field_metadata.type
    if kind is FieldDataType.NUMERIC:
        if field_metadata.scale == 0:
            return Integer()
        return Numeric(
            precision=field_metadata.size or None,
            scale=field_metadata.scale,
            asdecimal=True,
        )
    if kind is FieldDataType.DATE:
        return Date()
    if kind is FieldDataType.DATETIME:
        return DateTime()
    if kind is FieldDataType.TIME:
        return Time()
    if kind is FieldDataType.BYTE_ARRAY:
        return LargeBinary()
    return String(field_metadata.size or None)


def build_table(metadata: EntityMetadata, *, schema: str | None = None) -> Table:
    """Build a lightweight ``Table`` whose columns follow the entity's fields."""
    return Table(
        metadata.name,
        MetaData(),
        *[
            Column(f.name, sql_type(f), primary_key=f.is_primary_key)
            for f in metadata.fields
        ],
        schema=schema,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_sql_filter(
    table: Table,
    node: RestFilter | None,
    fields: Iterable[FieldMetadata],
    *,
    registry: SQLOperatorRegistry | None = None,
) -> ColumnElement[bool] | None:
    """
    Build a SQLAlchemy filter expression from a filter tree.

    Args:
        table: The table whose columns the leaves reference.
        node: Root of the filter tree; ``None`` yields no expression.
        fields: Metadata of the target entity, used for value coercion.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQL_REGISTRY``.

    Raises:
        FilterParseError: On an unknown field or an uncoercible value.
    """
    if node is None:
        return None
    reg = registry or DEFAULT_SQL_REGISTRY
    field_map = {f.name: f for f in fields}
    return _compile_node(table, node, field_map, reg)


def apply_sort(stmt: Select[Any], table: Table, sort: RestSort) -> Select[Any]:
    """Apply ``ORDER BY``; with no usable sort field, order by the first column."""
    clauses: list[Any] = []
    for sort_field in sort.fields:
        col = table.c.get(sort_field.field)
        if col is None:
            logger.debug("Ignoring sort on unknown field %s", sort_field.field)
            continue
        clauses.append(col.desc() if sort_field.descending else col.asc())
    if not clauses:
        clauses.append(next(iter(table.c)))
    return stmt.order_by(*clauses)


def apply_pagination(stmt: Select[Any], skip: int, take: int) -> Select[Any]:
    if skip:
        stmt = stmt.offset(skip)
    if take:
        stmt = stmt.limit(take)
    return stmt


def build_count(stmt: Select[Any]) -> Select[Any]:
    """``SELECT count(*)`` over the filtered, unsorted, unpaginated *stmt*."""
    return select(func.count()).select_from(stmt.subquery("sel"))


def build_fetch_statements(
    table: Table,
    parameters: RestParameters,
    fields: Iterable[FieldMetadata],
    *,
    registry: SQLOperatorRegistry | None = None,
) -> tuple[Select[Any], Select[Any] | None]:
    """
    Compose the page query and, when ``with_count`` is set, the count query.

    The explicit filter and the smart filter are ``and``-combined.
    """
    fields = list(fields)
    stmt = select(*table.c)
    where = build_sql_filter(
        table, parameters.compose_filter(fields), fields, registry=registry
    )
    if where is not None:
        stmt = stmt.where(where)
    count_stmt = build_count(stmt) if parameters.with_count else None
    stmt = apply_sort(stmt, table, parameters.sort)
    stmt = apply_pagination(stmt, parameters.skip, parameters.take)
    return stmt, count_stmt


def render_fragment(clause: Any, dialect: Dialect | None = None) -> SqlFragment:
    """Render *clause* with *dialect* (SQLite by default)."""
    compiled = clause.compile(dialect=dialect or sqlite.dialect())
    params = compiled.params
    order = compiled.positiontup if compiled.positiontup is not None else list(params)
    return SqlFragment(sql=str(compiled), parameters=[params[name] for name in order])


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_node(
    table: Table,
    node: RestFilter,
    fields: dict[str, FieldMetadata],
    registry: SQLOperatorRegistry,
) -> ColumnElement[bool]:
    if node.is_composite:
        return _compile_composite(table, node, fields, registry)
    return _compile_leaf(table, node, fields, registry)


def _compile_composite(
    table: Table,
    node: RestFilter,
    fields: dict[str, FieldMetadata],
    registry: SQLOperatorRegistry,
) -> ColumnElement[bool]:
    conditions = [
        _compile_node(table, child, fields, registry)
        for child in node.filters
        if child is not None
    ]
    if node.logic is FilterLogic.OR:
        return or_(*conditions) if conditions else false()
    return and_(*conditions) if conditions else true()


def _compile_leaf(
    table: Table,
    node: RestFilter,
    fields: dict[str, FieldMetadata],
    registry: SQLOperatorRegistry,
) -> ColumnElement[bool]:
    name = node.field or ""
    operator = node.operator
    if operator is None:
        raise FilterParseError({name: ["Missing operator"]})
    strategy = registry.get(operator)
    if strategy is None:
        raise FilterParseError({name: [f"Unsupported operator: {operator.value}"]})

    column = table.c.get(name)
    if column is None:
        raise FilterParseError({name: ["Unknown field"]})

    field_metadata = fields.get(name)
    ignore_case = node.ignore_case and (
        field_metadata is None or field_metadata.type is FieldDataType.STRING
    )
    return strategy.apply(column, coerce_condition(node, field_metadata), ignore_case)

"""Relational backend: SQLAlchemy predicate compiler, entity manager and discovery."""

from __future__ import annotations

from .compiler import (
    SqlFragment,
    apply_pagination,
    apply_sort,
    build_count,
    build_fetch_statements,
    build_sql_filter,
    build_table,
    render_fragment,
)
from .data_context import SQLDataContext, map_column_type, reflect_entities
from .manager import SQLEntityManager
from .operators import DEFAULT_SQL_REGISTRY, build_default_sql_registry
from .strategy import SQLOperator, SQLOperatorRegistry

__all__ = [
    "DEFAULT_SQL_REGISTRY",
    "SQLDataContext",
    "SQLEntityManager",
    "SQLOperator",
    "SQLOperatorRegistry",
    "SqlFragment",
    "apply_pagination",
    "apply_sort",
    "build_count",
    "build_default_sql_registry",
    "build_fetch_statements",
    "build_sql_filter",
    "build_table",
    "map_column_type",
    "reflect_entities",
    "render_fragment",
]

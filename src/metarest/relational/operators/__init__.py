"""
SQLAlchemy operator implementations and default registry.

Usage::

    from metarest.relational.operators import DEFAULT_SQL_REGISTRY

    expr = DEFAULT_SQL_REGISTRY.apply(FilterOperator.EQ, column, value)
"""

from __future__ import annotations

from ..strategy import SQLOperatorRegistry
from .null import (
    IsEmptyOperator,
    IsNotEmptyOperator,
    IsNotNullOperator,
    IsNullOperator,
)
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import (
    ContainsOperator,
    DoesNotContainOperator,
    EndsWithOperator,
    StartsWithOperator,
)


def build_default_sql_registry() -> SQLOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        # String
        StartsWithOperator(),
        EndsWithOperator(),
        ContainsOperator(),
        DoesNotContainOperator(),
        # Null / empty
        IsNullOperator(),
        IsNotNullOperator(),
        IsEmptyOperator(),
        IsNotEmptyOperator(),
    )
    return registry


DEFAULT_SQL_REGISTRY: SQLOperatorRegistry = build_default_sql_registry()

__all__ = [
    "DEFAULT_SQL_REGISTRY",
    "SQLOperatorRegistry",
    "build_default_sql_registry",
]

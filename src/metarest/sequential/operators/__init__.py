"""
Record operator implementations.

Usage::

    from metarest.sequential.operators import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(FilterOperator.EQ, actual, expected)
"""

from __future__ import annotations

from ..evaluator import RecordOperatorRegistry
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


def build_default_registry() -> RecordOperatorRegistry:
    """Create a fresh registry holding every built-in record operator."""
    registry = RecordOperatorRegistry()
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


DEFAULT_RECORD_REGISTRY: RecordOperatorRegistry = build_default_registry()

__all__ = [
    "DEFAULT_RECORD_REGISTRY",
    "RecordOperatorRegistry",
    "build_default_registry",
]

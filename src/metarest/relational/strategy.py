"""
Per-operator SQL builders for the relational filter compiler.

Each ``SQLOperator`` turns one leaf of a ``RestFilter`` into a SQLAlchemy
clause; ``SQLOperatorRegistry`` maps filter operators to builders.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from ..filters import FilterOperator


class SQLOperator(ABC):
    """
    Strategy interface for compiling a filter operator
    into a SQLAlchemy ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(
        self,
        column: Any,
        value: Any,
        ignore_case: bool = False,
    ) -> ColumnElement[bool]:
        """
        Build the WHERE clause for one leaf filter.

        Args:
            column: A SQLAlchemy column.
            value: The coerced condition value of the leaf filter.
            ignore_case: Lower-case both sides of a string comparison.

        Returns:
            A boolean clause over ``column``.
        """
        ...


class SQLOperatorRegistry:
    """
    Registry of ``SQLOperator`` instances keyed by :class:`FilterOperator`.
    """

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, SQLOperator] = {}

    def register(self, operator: SQLOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: FilterOperator) -> None:
        self._operators.pop(name, None)

    def get(self, name: FilterOperator) -> SQLOperator | None:
        return self._operators.get(name)

    def has(self, name: FilterOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[FilterOperator]:
        return set(self._operators.keys())

    def apply(
        self,
        name: FilterOperator,
        column: Any,
        value: Any,
        ignore_case: bool = False,
    ) -> ColumnElement[bool]:
        """
        Build the clause for ``name`` with its registered builder.

        Raises:
            ValueError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise ValueError(f"No SQL builder registered for operator: {name}")
        return op.apply(column, value, ignore_case)

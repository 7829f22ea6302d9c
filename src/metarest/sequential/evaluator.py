"""
In-memory operator evaluation strategy for streamed records.

Provides the RecordOperator protocol and a registry that maps
FilterOperator → evaluation strategy.

A ``None`` field value satisfies only ``isnull``, the same way a SQL
``NULL`` never satisfies a comparison, so that the record predicate and
the relational fragment select the same rows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..filters import FilterOperator


class RecordOperator(ABC):
    """
    Strategy interface for evaluating one leaf operator against a record value.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(
        self,
        field_value: Any,
        condition_value: Any,
        ignore_case: bool = False,
    ) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The coerced value read from the record.
            condition_value: The coerced value from the filter leaf.
            ignore_case: Compare strings case-insensitively.

        Returns:
            True if the condition is satisfied.
        """
        ...


class RecordOperatorRegistry:
    """
    Registry of RecordOperator instances keyed by FilterOperator.

    Usage::

        registry = RecordOperatorRegistry()
        registry.register(EqualOperator())

        result = registry.evaluate(FilterOperator.EQ, actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, RecordOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: RecordOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: RecordOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: FilterOperator) -> None:
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: FilterOperator) -> RecordOperator | None:
        return self._operators.get(name)

    def has(self, name: FilterOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[FilterOperator]:
        return set(self._operators.keys())

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self,
        name: FilterOperator,
        field_value: Any,
        condition_value: Any,
        ignore_case: bool = False,
    ) -> bool:
        """
        Evaluate ``name`` with its registered record operator.

        Raises:
            ValueError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise ValueError(f"No record operator registered for: {name}")
        return op.evaluate(field_value, condition_value, ignore_case)

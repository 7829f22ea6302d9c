"""Null / empty check operators: isnull, isnotnull, isempty, isnotempty."""

from __future__ import annotations

from typing import Any

from ...filters import FilterOperator
from ..evaluator import RecordOperator


class IsNullOperator(RecordOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NULL

    def evaluate(
        self, field_value: Any, _condition_value: Any, ignore_case: bool = False
    ) -> bool:
        return field_value is None


class IsNotNullOperator(RecordOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_NULL

    def evaluate(
        self, field_value: Any, _condition_value: Any, ignore_case: bool = False
    ) -> bool:
        return field_value is not None


class IsEmptyOperator(RecordOperator):
    """True only for the empty string; ``None`` is not empty."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_EMPTY

    def evaluate(
        self, field_value: Any, _condition_value: Any, ignore_case: bool = False
    ) -> bool:
        return field_value == ""


class IsNotEmptyOperator(RecordOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_EMPTY

    def evaluate(
        self, field_value: Any, _condition_value: Any, ignore_case: bool = False
    ) -> bool:
        return field_value is not None and field_value != ""

"""String operators: startswith, endswith, contains, doesnotcontain."""

from __future__ import annotations

from typing import Any

from ...filters import FilterOperator
from ..evaluator import RecordOperator


def _prepare(value: Any, ignore_case: bool) -> str:
    text = value if isinstance(value, str) else str(value)
    return text.lower() if ignore_case else text


class _PatternOperator(RecordOperator):
    def evaluate(
        self, field_value: Any, condition_value: Any, ignore_case: bool = False
    ) -> bool:
        if field_value is None or condition_value is None:
            return False
        return self.match(
            _prepare(field_value, ignore_case), _prepare(condition_value, ignore_case)
        )

    def match(self, text: str, pattern: str) -> bool:
        raise NotImplementedError


class StartsWithOperator(_PatternOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.STARTSWITH

    def match(self, text: str, pattern: str) -> bool:
        return text.startswith(pattern)


class EndsWithOperator(_PatternOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.ENDSWITH

    def match(self, text: str, pattern: str) -> bool:
        return text.endswith(pattern)


class ContainsOperator(_PatternOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def match(self, text: str, pattern: str) -> bool:
        return pattern in text


class DoesNotContainOperator(_PatternOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.DOES_NOT_CONTAIN

    def match(self, text: str, pattern: str) -> bool:
        return pattern not in text

"""Filter tree model and smart-filter expansion."""

from __future__ import annotations

from .model import RestFilter, between_filter
from .operators import (
    STRING_OPERATORS,
    VALUELESS_OPERATORS,
    FilterLogic,
    FilterOperator,
)
from .smart import SmartFilter, SmartRange, parse_smart_filter

__all__ = [
    "STRING_OPERATORS",
    "VALUELESS_OPERATORS",
    "FilterLogic",
    "FilterOperator",
    "RestFilter",
    "SmartFilter",
    "SmartRange",
    "between_filter",
    "parse_smart_filter",
]

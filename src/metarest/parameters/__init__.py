"""Query-string DSL: parameter model, parser and builder."""

from __future__ import annotations

from .models import (
    RestParameters,
    RestSort,
    SortDirection,
    SortField,
    compose_filter,
)
from .parser import ParametersParser
from .query_string import QueryStringBuilder

__all__ = [
    "ParametersParser",
    "QueryStringBuilder",
    "RestParameters",
    "RestSort",
    "SortDirection",
    "SortField",
    "compose_filter",
]

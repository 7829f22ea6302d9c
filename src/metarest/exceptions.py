"""Exception hierarchy for metarest.

All exceptions inherit from ``MetaRestError`` and provide ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class MetaRestError(Exception):
    """Root exception for the entire metarest package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


# ── Client errors ────────────────────────────────────────────────────


class ValidationError(MetaRestError):
    """Raised when a request (query string, body, key fields) is invalid.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        parts = []
        for name, messages in self.errors.items():
            joined = "; ".join(messages)
            parts.append(joined if name == "__root__" else f"{name}: {joined}")
        return ", ".join(parts) or "Validation failed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": str(self),
            "errors": self.errors,
        }


class FilterParseError(ValidationError):
    """Raised when the ``filter`` or ``sort`` query parameter is malformed."""


class OperatorNotFoundError(FilterParseError):
    """
    Unknown filter operator.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__({"operator": [message]})

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class RequestBodyError(ValidationError):
    """Raised when a request body is not a JSON object."""


# ── Conflicts ────────────────────────────────────────────────────────


class ConflictError(MetaRestError):
    """Base class for write conflicts reported by a backend."""


class DuplicateKeyError(ConflictError):
    """Raised by ``insert_entity`` when the primary key already exists."""

    def __init__(self, entity: str, key: dict[str, Any]) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"Duplicate key {key!r} on entity {entity}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DUPLICATE_KEY",
            "message": str(self),
            "key": {name: str(value) for name, value in self.key.items()},
        }


# ── Capability ───────────────────────────────────────────────────────


class UnsupportedOperationError(MetaRestError):
    """Raised when a write operation is invoked on a read-only entity."""

    def __init__(self, entity: str, operation: str) -> None:
        self.entity = entity
        self.operation = operation
        super().__init__(f"Entity {entity} is read-only: {operation} is not supported")


__all__: list[str] = [
    "ConflictError",
    "DuplicateKeyError",
    "FilterParseError",
    "MetaRestError",
    "OperatorNotFoundError",
    "RequestBodyError",
    "UnsupportedOperationError",
    "ValidationError",
]

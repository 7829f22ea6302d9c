"""Canonical per-request parameter record."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..filters import FilterLogic, RestFilter, SmartFilter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..metadata import FieldMetadata


class SortDirection(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    @classmethod
    def _missing_(cls, value: object) -> SortDirection | None:
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("asc", "ascending"):
                return cls.ASCENDING
            if key in ("desc", "descending"):
                return cls.DESCENDING
        return None


class _ParametersModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class SortField(_ParametersModel):
    field: str
    direction: SortDirection = SortDirection.ASCENDING

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, SortDirection):
            return SortDirection(value)
        return value

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING


class RestSort(_ParametersModel):
    fields: list[SortField] = Field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.fields)


class RestParameters(_ParametersModel):
    """
    Pagination, sort, filter, smart filter and count flag of one request.

    ``take == 0`` means no limit.  ``skip`` and ``take`` are clamped to be
    non-negative.
    """

    take: int = 0
    skip: int = 0
    sort: RestSort = Field(default_factory=RestSort)
    filter: RestFilter | None = None
    smart_filter: str | None = None
    with_count: bool = False

    @field_validator("take", "skip", mode="after")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(0, value)

    def compose_filter(self, fields: Sequence[FieldMetadata]) -> RestFilter | None:
        """Explicit filter and smart filter, ``and``-combined when both exist."""
        return compose_filter(self.filter, self.smart_filter, fields)


def compose_filter(
    explicit: RestFilter | None,
    smart_text: str | None,
    fields: Sequence[FieldMetadata],
) -> RestFilter | None:
    smart = SmartFilter(smart_text).compose_filter(fields) if smart_text else None
    if explicit is not None and smart is not None:
        return RestFilter.composite(FilterLogic.AND, explicit, smart)
    return explicit if explicit is not None else smart


def sort_to_list(sort: RestSort) -> list[dict[str, Any]]:
    return [{"field": f.field, "direction": f.direction.value} for f in sort.fields]


__all__: list[str] = [
    "RestParameters",
    "RestSort",
    "SortDirection",
    "SortField",
    "compose_filter",
    "sort_to_list",
]

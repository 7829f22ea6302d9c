"""
Recursive filter tree.

A :class:`RestFilter` is either a *composite* node (``logic`` plus a
non-empty ``filters`` list) or a *leaf* comparison (``field``,
``operator``, ``value``, ``ignore_case``).  The JSON form matches the
``filter`` query-string parameter::

    {"field": "Name", "operator": "contains", "value": "an", "ignoreCase": true}
    {"logic": "or", "filters": [{...}, {...}]}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..exceptions import OperatorNotFoundError
from .operators import FilterLogic, FilterOperator


class RestFilter(BaseModel):
    """One node of a filter tree."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    field: str | None = None
    operator: FilterOperator | None = None
    value: Any = None
    ignore_case: bool = False
    logic: FilterLogic = FilterLogic.AND
    filters: list[RestFilter | None] = Field(default_factory=list)

    @field_validator("operator", mode="before")
    @classmethod
    def _normalize_operator(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, FilterOperator):
            name = value.strip().lower()
            valid = [op.value for op in FilterOperator]
            if name not in valid:
                raise OperatorNotFoundError(value, valid)
            return name
        return value

    @field_validator("logic", mode="before")
    @classmethod
    def _normalize_logic(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, FilterLogic):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def _check_leaf(self) -> RestFilter:
        if not self.filters and (not self.field or self.operator is None):
            raise ValueError("A leaf filter requires both 'field' and 'operator'")
        return self

    @property
    def is_composite(self) -> bool:
        return bool(self.filters)

    def clone(self) -> RestFilter:
        """Deep copy, including nested children; ``None`` children are kept."""
        return self.model_copy(deep=True)

    def to_dict(self) -> dict[str, Any]:
        """Wire form of this node (camelCase keys, composite or leaf shape)."""
        if self.is_composite:
            return {
                "logic": self.logic.value,
                "filters": [c.to_dict() if c is not None else None for c in self.filters],
            }
        data: dict[str, Any] = {
            "field": self.field,
            "operator": self.operator.value if self.operator else None,
            "value": self.value,
        }
        if self.ignore_case:
            data["ignoreCase"] = True
        return data

    @classmethod
    def leaf(
        cls,
        field: str,
        operator: FilterOperator | str,
        value: Any = None,
        *,
        ignore_case: bool = False,
    ) -> RestFilter:
        return cls(field=field, operator=operator, value=value, ignore_case=ignore_case)

    @classmethod
    def composite(
        cls,
        logic: FilterLogic | str,
        *filters: RestFilter | None,
    ) -> RestFilter:
        return cls(logic=logic, filters=list(filters))


def between_filter(field: str, from_: Any, to: Any) -> RestFilter:
    """
    Build ``field >= from_ AND field <= to``.

    Raises:
        ValueError: If *field* is empty or either bound is ``None``.
    """
    if not field:
        raise ValueError("field must not be empty")
    if from_ is None:
        raise ValueError("from_ must not be None")
    if to is None:
        raise ValueError("to must not be None")
    return RestFilter.composite(
        FilterLogic.AND,
        RestFilter.leaf(field, FilterOperator.GTE, from_),
        RestFilter.leaf(field, FilterOperator.LTE, to),
    )


__all__: list[str] = ["RestFilter", "between_filter"]

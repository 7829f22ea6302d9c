"""In-memory ordering of records by a RestSort."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any

from ..metadata import FieldDataType
from ..values import coerce_value

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ..metadata import FieldMetadata
    from ..parameters import RestSort

    Comparator = Callable[[Any, Any], int]

logger = logging.getLogger("metarest.sequential")


def _compare_values(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def _compare_strings(left: Any, right: Any) -> int:
    return _compare_values(str(left), str(right))


def _compare_bytes(left: Any, right: Any) -> int:
    return _compare_values(bytes(left), bytes(right))


_COMPARATORS: dict[FieldDataType, Comparator] = {
    FieldDataType.STRING: _compare_strings,
    FieldDataType.NUMERIC: _compare_values,
    FieldDataType.DATE: _compare_values,
    FieldDataType.DATETIME: _compare_values,
    FieldDataType.TIME: _compare_values,
    FieldDataType.BYTE_ARRAY: _compare_bytes,
}


def comparator_for(field: FieldMetadata | None) -> Comparator:
    if field is None:
        return _compare_values
    return _COMPARATORS.get(field.type, _compare_values)


def sort_records(
    records: Iterable[Mapping[str, Any]],
    sort: RestSort,
    fields: Iterable[FieldMetadata],
) -> list[Mapping[str, Any]]:
    """
    Return *records* ordered by every field of *sort* in turn.

    Nulls sort after values in ascending order and before them in
    descending order.  Fields unknown to *fields* are skipped.  The sort
    is stable.
    """
    field_map = {f.name: f for f in fields}
    keys = []
    for s in sort.fields:
        field = field_map.get(s.field)
        if field is None:
            logger.debug("Ignoring sort on unknown field %s", s.field)
            continue
        keys.append((s.field, field, comparator_for(field), -1 if s.descending else 1))

    def compare(left: Mapping[str, Any], right: Mapping[str, Any]) -> int:
        for name, field, cmp, multiplier in keys:
            a = coerce_value(left.get(name), field)
            b = coerce_value(right.get(name), field)
            if a is None and b is None:
                result = 0
            elif a is None:
                result = 1
            elif b is None:
                result = -1
            else:
                result = cmp(a, b)
            if result:
                return result * multiplier
        return 0

    return sorted(records, key=cmp_to_key(compare))

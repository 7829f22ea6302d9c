"""
Per-type value coercion.

Records are plain ``dict[str, Any]`` mappings whose values are one of
``str``, ``int``, ``Decimal``, ``date``, ``datetime``, ``time``, ``bytes``,
``bool`` or ``None``.  Every component that compares or stores values
(both filter compilers, field extraction and the storage adapters)
coerces through :func:`coerce_value` so that a filter value parsed from
JSON and a value read from storage always meet as the same Python type.
"""

from __future__ import annotations

import base64
import binascii
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from .exceptions import FilterParseError
from .filters.operators import STRING_OPERATORS, VALUELESS_OPERATORS
from .metadata import FieldDataType

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .filters import RestFilter
    from .metadata import EntityMetadata, FieldMetadata

Record = dict[str, Any]


def _parse_datetime(text: str) -> datetime:
    text = text.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return _parse_datetime(text).date()
    raise ValueError(f"Cannot convert {value!r} to a date")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return _parse_datetime(value)
    raise ValueError(f"Cannot convert {value!r} to a datetime")


def _to_time(value: Any) -> time:
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise ValueError(f"Cannot convert {value!r} to a time")


def _to_number(value: Any, scale: int) -> int | Decimal:
    if isinstance(value, bool):
        return int(value)
    if not isinstance(value, (int, float, Decimal, str)):
        raise ValueError(f"Cannot convert {value!r} to a number")
    if isinstance(value, int):
        return value if scale == 0 else Decimal(value)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Cannot convert {value!r} to a number") from exc
    if not number.is_finite():
        raise ValueError(f"Cannot convert {value!r} to a finite number")
    if scale == 0 and number == number.to_integral_value():
        return int(number)
    return number


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 payload: {value!r}") from exc
    raise ValueError(f"Cannot convert {value!r} to bytes")


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, bytes, bytearray)):
        raise ValueError(f"Cannot convert {value!r} to a string")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_value(value: Any, field: FieldMetadata | None) -> Any:
    """
    Convert *value* to the Python type that represents ``field.type``.

    ``None`` passes through unchanged and so does any value for an
    unknown field (``field is None``).

    Raises:
        ValueError: If *value* cannot be represented as the field type.
    """
    if value is None or field is None:
        return value

    kind = field.type
    if kind is FieldDataType.STRING:
        return _to_string(value)
    if kind is FieldDataType.NUMERIC:
        return _to_number(value, field.scale)
    if kind is FieldDataType.DATE:
        return _to_date(value)
    if kind is FieldDataType.DATETIME:
        return _to_datetime(value)
    if kind is FieldDataType.TIME:
        return _to_time(value)
    if kind is FieldDataType.BYTE_ARRAY:
        return _to_bytes(value)
    return value


def coerce_record(record: Mapping[str, Any], metadata: EntityMetadata) -> Record:
    """Coerce every known field of *record*; unknown keys are kept as-is."""
    fields = metadata.field_map
    return {name: coerce_value(value, fields.get(name)) for name, value in record.items()}


def coerce_condition(node: RestFilter, field: FieldMetadata | None) -> Any:
    """
    Condition value of a leaf filter, coerced for comparison with *field*.

    Null/empty checks carry no value; pattern operators always compare
    text.

    Raises:
        FilterParseError: If the value cannot be represented as the field type.
    """
    operator = node.operator
    if operator in VALUELESS_OPERATORS or node.value is None:
        return None
    if operator in STRING_OPERATORS:
        return node.value if isinstance(node.value, str) else str(node.value)
    try:
        return coerce_value(node.value, field)
    except ValueError as e:
        raise FilterParseError({node.field or "": [str(e)]}) from e


def key_of(record: Mapping[str, Any], metadata: EntityMetadata) -> tuple[Any, ...]:
    """Primary-key tuple of *record* in metadata field order."""
    return tuple(record.get(f.name) for f in metadata.key_fields)


__all__: list[str] = [
    "Record",
    "coerce_condition",
    "coerce_record",
    "coerce_value",
    "key_of",
]

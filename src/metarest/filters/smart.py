"""
Smart filter: expand one free-text token into a filter across all fields.

String fields get a case-insensitive ``contains``; numeric and date
fields get an equality or a ``between`` range when the token parses as a
number, a date, or a ``"low - high"`` range of either.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from ..metadata import FieldDataType
from .model import RestFilter, between_filter
from .operators import FilterLogic, FilterOperator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..metadata import FieldMetadata

RANGE_SEPARATOR = " - "

_DATE_FORMATS = ("%d/%m/%Y", "%d.%m.%Y", "%Y/%m/%d")
_DATETIME_FORMATS = ("%d/%m/%Y %H:%M", "%d/%m/%Y %H:%M:%S", "%Y/%m/%d %H:%M:%S")


def _parse_date(text: str) -> date | None:
    """Parse *text* as a date or datetime; purely numeric text is not a date."""
    text = text.strip()
    if not text or text.lstrip("+-").replace(".", "", 1).isdigit():
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_number(text: str) -> Decimal | None:
    try:
        number = Decimal(text.strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


@dataclass(frozen=True)
class SmartRange:
    """Numeric and date interpretation of a smart-filter token."""

    min_num: Decimal | None = None
    max_num: Decimal | None = None
    min_date: date | None = None
    max_date: date | None = None

    @property
    def has_num_range(self) -> bool:
        return self.min_num is not None and self.max_num is not None

    @property
    def has_date_range(self) -> bool:
        return self.min_date is not None and self.max_date is not None


def parse_smart_filter(text: str) -> SmartRange:
    """
    Interpret *text* once as a range, a single date or a single number.

    Only the literal ``" - "`` separator (with spaces) produces a range.
    Numeric ranges are ordered low/high; date ranges keep the left part
    as the lower bound.
    """
    parts = text.split(RANGE_SEPARATOR)
    if len(parts) == 2:
        left_date, right_date = _parse_date(parts[0]), _parse_date(parts[1])
        if left_date is not None and right_date is not None:
            return SmartRange(min_date=left_date, max_date=right_date)
        left_num, right_num = _parse_number(parts[0]), _parse_number(parts[1])
        if left_num is not None and right_num is not None:
            return SmartRange(
                min_num=min(left_num, right_num),
                max_num=max(left_num, right_num),
            )

    single_date = _parse_date(text)
    if single_date is not None:
        return SmartRange(min_date=single_date)
    single_num = _parse_number(text)
    if single_num is not None:
        return SmartRange(min_num=single_num)
    return SmartRange()


class SmartFilter:
    """A free-text search value bound to nothing until composed with fields."""

    def __init__(self, value: str | None) -> None:
        self.value = value

    def compose_filter(self, fields: Sequence[FieldMetadata]) -> RestFilter | None:
        """
        Build the OR-combined filter for *fields*.

        Returns ``None`` when the text is empty or no field matches, and the
        single fragment itself (unwrapped) when only one field matches.
        """
        if not self.value or not self.value.strip():
            return None

        text = self.value
        smart = parse_smart_filter(text)
        fragments: list[RestFilter] = []

        for field in fields:
            if field.type is FieldDataType.STRING:
                fragments.append(
                    RestFilter.leaf(
                        field.name, FilterOperator.CONTAINS, text, ignore_case=True
                    )
                )
            elif field.type is FieldDataType.NUMERIC:
                if smart.has_num_range:
                    fragments.append(
                        between_filter(field.name, smart.min_num, smart.max_num)
                    )
                elif smart.min_num is not None:
                    fragments.append(
                        RestFilter.leaf(field.name, FilterOperator.EQ, smart.min_num)
                    )
            elif field.type in (FieldDataType.DATE, FieldDataType.DATETIME):
                if smart.has_date_range:
                    fragments.append(
                        between_filter(field.name, smart.min_date, smart.max_date)
                    )
                elif smart.min_date is not None:
                    fragments.append(
                        RestFilter.leaf(field.name, FilterOperator.EQ, smart.min_date)
                    )

        if not fragments:
            return None
        if len(fragments) == 1:
            return fragments[0]
        return RestFilter.composite(FilterLogic.OR, *fragments)


__all__: list[str] = ["SmartFilter", "SmartRange", "parse_smart_filter"]

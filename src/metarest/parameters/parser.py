"""ParametersParser: query string -> RestParameters."""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any
from urllib.parse import parse_qsl

import pydantic

from ..exceptions import FilterParseError
from ..filters import RestFilter
from .models import RestParameters, RestSort, SortField

TAKE_KEY = "take"
SKIP_KEY = "skip"
WITH_COUNT_KEY = "withcount"
SORT_KEY = "sort"
FILTER_KEY = "filter"
SMART_FILTER_KEY = "smartfilter"


def _format_errors(exc: pydantic.ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


class ParametersParser:
    """
    Decode the query-string DSL.

    Keys are case-insensitive and unknown keys are ignored.  ``take``,
    ``skip`` and ``withcount`` values that do not parse are ignored;
    malformed ``sort`` or ``filter`` JSON raises :class:`FilterParseError`.
    """

    def parse(self, query: str | Mapping[str, Any] | None) -> RestParameters | None:
        """Return the parsed parameters, or ``None`` for an empty query."""
        items = self._items(query)
        if not items:
            return None

        params = RestParameters()
        for key, value in items.items():
            if key == TAKE_KEY:
                take = self._int_param(value)
                if take is not None:
                    params.take = max(0, take)
            elif key == SKIP_KEY:
                skip = self._int_param(value)
                if skip is not None:
                    params.skip = max(0, skip)
            elif key == WITH_COUNT_KEY:
                flag = self._bool_param(value)
                if flag is not None:
                    params.with_count = flag
            elif key == SORT_KEY:
                params.sort = self.parse_sort(value)
            elif key == FILTER_KEY:
                params.filter = self.parse_filter(value)
            elif key == SMART_FILTER_KEY:
                params.smart_filter = value if value else None
        return params

    def parse_filter(self, raw: Any) -> RestFilter | None:
        data = self._load_json(raw, FILTER_KEY)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise FilterParseError({FILTER_KEY: ["Expected a JSON object"]})
        try:
            return RestFilter.model_validate(data)
        except pydantic.ValidationError as exc:
            raise FilterParseError({FILTER_KEY: _format_errors(exc)}) from exc

    def parse_sort(self, raw: Any) -> RestSort:
        data = self._load_json(raw, SORT_KEY)
        if data is None:
            return RestSort()
        if not isinstance(data, list):
            raise FilterParseError({SORT_KEY: ["Expected a JSON array"]})
        try:
            return RestSort(fields=[SortField.model_validate(item) for item in data])
        except pydantic.ValidationError as exc:
            raise FilterParseError({SORT_KEY: _format_errors(exc)}) from exc

    # -- helpers -------------------------------------------------------------

    def _items(self, query: str | Mapping[str, Any] | None) -> dict[str, Any]:
        if not query:
            return {}
        if isinstance(query, Mapping):
            pairs = list(query.items())
        else:
            pairs = parse_qsl(query.lstrip("?"), keep_blank_values=True)
        return {str(k).strip().lower(): v for k, v in pairs}

    def _load_json(self, raw: Any, key: str) -> Any:
        if raw is None or raw == "":
            return None
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise FilterParseError({key: [str(e)]}) from e

    def _int_param(self, v: Any) -> int | None:
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    def _bool_param(self, v: Any) -> bool | None:
        if isinstance(v, bool):
            return v
        text = str(v).strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        return None

"""QueryStringBuilder: RestParameters -> query string (pagination links)."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlencode

from ..serialization import dump_json
from .models import sort_to_list
from .parser import (
    FILTER_KEY,
    SKIP_KEY,
    SMART_FILTER_KEY,
    SORT_KEY,
    TAKE_KEY,
    WITH_COUNT_KEY,
)

if TYPE_CHECKING:
    from .models import RestParameters


class QueryStringBuilder:
    """Build the query string that :class:`ParametersParser` parses back."""

    def build(self, parameters: RestParameters | None) -> str:
        if parameters is None:
            return ""
        params: dict[str, str | int] = {}
        if parameters.take:
            params[TAKE_KEY] = parameters.take
        if parameters.skip:
            params[SKIP_KEY] = parameters.skip
        if parameters.with_count:
            params[WITH_COUNT_KEY] = "true"
        if parameters.sort:
            params[SORT_KEY] = dump_json(sort_to_list(parameters.sort)).decode()
        if parameters.filter is not None:
            params[FILTER_KEY] = dump_json(parameters.filter.to_dict()).decode()
        if parameters.smart_filter:
            params[SMART_FILTER_KEY] = parameters.smart_filter
        return urlencode(params) if params else ""

    def next_page(self, parameters: RestParameters) -> str | None:
        """Query string of the page after *parameters*, or ``None`` when unpaged."""
        if not parameters.take:
            return None
        following = parameters.model_copy(
            update={"skip": parameters.skip + parameters.take}
        )
        return self.build(following)

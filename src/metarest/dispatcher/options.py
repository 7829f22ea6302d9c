"""Options of a DataRequestHandler."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from ..parameters import ParametersParser

DEFAULT_METADATA_CACHE_TTL = timedelta(minutes=10)


@dataclass
class DataRequestOptions:
    """
    Configuration of a :class:`DataRequestHandler`.

    Attributes:
        metadata_cache_ttl: Sliding expiration of discovered metadata.
        parameters_parser: Decoder of the query-string DSL.
        camel_case: Emit camelCase property names in metadata payloads.
    """

    metadata_cache_ttl: timedelta = DEFAULT_METADATA_CACHE_TTL
    parameters_parser: ParametersParser = field(default_factory=ParametersParser)
    camel_case: bool = True

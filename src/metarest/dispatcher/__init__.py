"""Request dispatcher: routing, metadata caching, field extraction, responses."""

from __future__ import annotations

from ..serialization import dump_json
from .cache import MetadataCache
from .extraction import decode_body, extract_fields
from .handler import DataRequestHandler, resolve_entity_manager
from .options import DEFAULT_METADATA_CACHE_TTL, DataRequestOptions
from .request import METADATA_SEGMENT, RestMethod, RestRequest, RestResponse

__all__ = [
    "DEFAULT_METADATA_CACHE_TTL",
    "METADATA_SEGMENT",
    "DataRequestHandler",
    "DataRequestOptions",
    "MetadataCache",
    "RestMethod",
    "RestRequest",
    "RestResponse",
    "decode_body",
    "dump_json",
    "extract_fields",
    "resolve_entity_manager",
]

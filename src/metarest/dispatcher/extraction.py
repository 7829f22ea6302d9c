"""Field extraction from a decoded request body."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from ..exceptions import RequestBodyError
from ..values import coerce_value
from .request import RestMethod

if TYPE_CHECKING:
    from ..metadata import EntityMetadata
    from ..values import Record

logger = logging.getLogger("metarest.dispatcher")


def decode_body(body: bytes | str | None) -> dict[str, Any]:
    """
    Decode a JSON object body; floats are read as ``Decimal``.

    Raises:
        RequestBodyError: If the body is empty, not JSON, or not an object.
    """
    if not body:
        raise RequestBodyError({"body": ["Request body is empty"]})
    try:
        data = json.loads(body, parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestBodyError({"body": [f"Invalid JSON: {e}"]}) from e
    if not isinstance(data, dict):
        raise RequestBodyError({"body": ["Expected a JSON object"]})
    return data


def extract_fields(
    body: dict[str, Any], metadata: EntityMetadata, method: RestMethod
) -> Record:
    """
    Pick the entity's fields out of *body*, coerced to their declared types.

    ``PUT`` sets every field the body omits to ``None``; other methods leave
    omitted fields absent.  A value that fails coercion is dropped.
    """
    fields: Record = {}
    for field in metadata.fields:
        if field.name not in body:
            if method is RestMethod.PUT:
                fields[field.name] = None
            continue
        raw = body[field.name]
        try:
            fields[field.name] = coerce_value(raw, field)
        except ValueError as e:
            logger.debug("Dropping field %s of %s: %s", field.name, metadata.name, e)
    return fields

"""JSON encoding shared by response payloads and query-string building."""

from __future__ import annotations

import base64
import re
from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic_core import to_json


def decimal_text(value: Decimal) -> str | None:
    """Exact JSON number text of *value*; ``None`` for NaN and infinities."""
    if not value.is_finite():
        return None
    if value == value.to_integral_value():
        return str(int(value))
    return format(value, "f")


class _DecimalPlaceholders:
    """Decimals travel through ``to_json`` as unique string tokens; ``restore``
    puts their exact number text back."""

    def __init__(self) -> None:
        self._prefix = f"__decimal_{uuid4().hex}_"
        self._pattern = re.compile(rf'"{self._prefix}(\d+)"')
        self._texts: list[str] = []

    def token(self, text: str) -> str:
        self._texts.append(text)
        return f"{self._prefix}{len(self._texts) - 1}"

    def restore(self, encoded: bytes) -> bytes:
        if not self._texts:
            return encoded
        return self._pattern.sub(
            lambda m: self._texts[int(m.group(1))], encoded.decode()
        ).encode()


def _jsonable(value: Any, placeholders: _DecimalPlaceholders) -> Any:
    if isinstance(value, Decimal):
        text = decimal_text(value)
        return None if text is None else placeholders.token(text)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {k: _jsonable(v, placeholders) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v, placeholders) for v in value]
    return value


def dump_json(content: Any) -> bytes:
    """
    Encode *content* to JSON bytes.

    Decimals become JSON numbers carrying their exact digits, byte
    sequences become standard base64 strings, and dates and times use
    ISO 8601.
    """
    placeholders = _DecimalPlaceholders()
    return placeholders.restore(to_json(_jsonable(content, placeholders)))

"""Transport-neutral request and response shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

METADATA_SEGMENT = "$metadata"


class RestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: str) -> RestMethod | None:
        try:
            return cls(method.upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class RestRequest:
    """An inbound request as seen by a :class:`DataRequestHandler`."""

    method: str
    path: str
    query_string: str = ""
    body: bytes | str | None = None

    @property
    def paths(self) -> list[str]:
        return [segment for segment in self.path.split("/") if segment]

    @property
    def is_metadata_requested(self) -> bool:
        segments = self.paths
        return bool(segments) and segments[-1] == METADATA_SEGMENT


@dataclass(frozen=True)
class RestResponse:
    """Outgoing response; ``content`` is already-encoded JSON or ``None``."""

    status_code: int = 200
    content: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)
    media_type: str = "application/json"

"""Backend-facing protocols: entity managers and the data contexts that discover them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .metadata import EntityMetadata
    from .parameters import RestParameters
    from .values import Record


@dataclass(frozen=True)
class FetchEntitiesResponse:
    """Result of ``fetch_entities``; ``total_count`` is 0 unless a count was requested."""

    entities: list[Record] = field(default_factory=list)
    total_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.entities, "count": self.total_count}


@dataclass(frozen=True)
class ValidationResult:
    """One update/delete validation failure."""

    message: str
    member_names: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"memberNames": list(self.member_names), "message": self.message}


@runtime_checkable
class IEntityManager(Protocol):
    """
    Uniform CRUD facade over one backend entity.

    Read-only managers (``is_read_only``) support only ``fetch_entities``;
    the write operations raise ``UnsupportedOperationError``.
    """

    @property
    def metadata(self) -> EntityMetadata: ...

    @property
    def is_read_only(self) -> bool: ...

    async def fetch_entities(
        self, parameters: RestParameters | None
    ) -> FetchEntitiesResponse: ...

    async def insert_entity(self, fields: Record) -> Record: ...

    async def update_entity(self, fields: Record) -> list[ValidationResult]: ...

    async def delete_entity(self, fields: Record) -> list[ValidationResult]: ...


@runtime_checkable
class IDataContext(Protocol):
    """A storage backend able to discover its entity managers."""

    @property
    def name(self) -> str: ...

    async def fetch_entity_managers(self) -> list[IEntityManager]: ...


def missing_key_results(
    fields: Record, metadata: EntityMetadata
) -> list[ValidationResult]:
    """One result per primary-key field absent (or null) in *fields*."""
    return [
        ValidationResult("Key field missing", (f.name,))
        for f in metadata.key_fields
        if fields.get(f.name) is None
    ]


__all__: list[str] = [
    "FetchEntitiesResponse",
    "IDataContext",
    "IEntityManager",
    "ValidationResult",
    "missing_key_results",
]

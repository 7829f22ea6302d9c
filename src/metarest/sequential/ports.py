"""Indexed sequential file protocols consumed by the sequential adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ..metadata import EntityMetadata
    from ..values import Record


@runtime_checkable
class IIndexedFile(Protocol):
    """
    One keyed file.  Records are streamed in primary-key order.

    ``write`` stores a new record, ``rewrite`` replaces an existing one and
    returns ``False`` when no record has that key; ``delete`` likewise.
    """

    @property
    def metadata(self) -> EntityMetadata: ...

    def scan(self) -> AsyncIterator[Record]: ...

    async def read(self, key: tuple[Any, ...]) -> Record | None: ...

    async def write(self, record: Record) -> None: ...

    async def rewrite(self, record: Record) -> bool: ...

    async def delete(self, key: tuple[Any, ...]) -> bool: ...


@runtime_checkable
class IIndexedFileSystem(Protocol):
    """A catalogue of indexed files."""

    async def list_files(self) -> list[IIndexedFile]: ...

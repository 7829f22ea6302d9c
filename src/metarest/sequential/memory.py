"""InMemoryIndexedFile: dict-backed indexed file for tests and prototyping."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..values import coerce_record, key_of

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from ..metadata import EntityMetadata
    from ..values import Record
    from .ports import IIndexedFile


class InMemoryIndexedFile:
    """In-memory implementation of ``IIndexedFile``.

    Stores coerced records in a plain dict keyed by their primary-key tuple.
    """

    def __init__(
        self, metadata: EntityMetadata, records: Iterable[Record] = ()
    ) -> None:
        self._metadata = metadata
        self._store: dict[tuple[Any, ...], Record] = {}
        for record in records:
            stored = coerce_record(record, metadata)
            self._store[key_of(stored, metadata)] = stored

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    async def scan(self) -> AsyncIterator[Record]:
        for key in sorted(self._store):
            record = self._store.get(key)
            if record is not None:
                yield dict(record)

    async def read(self, key: tuple[Any, ...]) -> Record | None:
        record = self._store.get(key)
        return dict(record) if record is not None else None

    async def write(self, record: Record) -> None:
        stored = coerce_record(record, self._metadata)
        key = key_of(stored, self._metadata)
        if key in self._store:
            raise KeyError(key)
        self._store[key] = stored

    async def rewrite(self, record: Record) -> bool:
        stored = coerce_record(record, self._metadata)
        key = key_of(stored, self._metadata)
        if key not in self._store:
            return False
        self._store[key] = stored
        return True

    async def delete(self, key: tuple[Any, ...]) -> bool:
        return self._store.pop(key, None) is not None

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class InMemoryIndexedFileSystem:
    """A fixed catalogue of :class:`InMemoryIndexedFile` instances."""

    def __init__(self, files: Iterable[IIndexedFile] = ()) -> None:
        self._files: list[IIndexedFile] = list(files)

    def add(self, file: IIndexedFile) -> None:
        self._files.append(file)

    async def list_files(self) -> list[IIndexedFile]:
        return list(self._files)

"""SQLEntityManager: CRUD over one table or view through an async SQLAlchemy engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from ..exceptions import DuplicateKeyError, UnsupportedOperationError, ValidationError
from ..parameters import RestParameters
from ..ports import FetchEntitiesResponse, ValidationResult, missing_key_results
from ..values import coerce_record
from .compiler import build_fetch_statements, build_table

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

    from ..metadata import EntityMetadata
    from ..values import Record
    from .strategy import SQLOperatorRegistry

logger = logging.getLogger("metarest.relational")

RECORD_NOT_FOUND = "Record not found"


class SQLEntityManager:
    """
    Entity manager for a relational table or view.

    Write capability is a flag: views (``metadata.is_read_only``) expose
    only ``fetch_entities`` and every write raises
    :class:`UnsupportedOperationError`.  Each call runs in its own
    connection; writes run in a single transaction.
    """

    def __init__(
        self,
        metadata: EntityMetadata,
        engine: AsyncEngine,
        *,
        schema: str | None = None,
        registry: SQLOperatorRegistry | None = None,
    ) -> None:
        self._metadata = metadata
        self._engine = engine
        self._registry = registry
        self._table = build_table(metadata, schema=schema)

    @property
    def metadata(self) -> EntityMetadata:
        return self._metadata

    @property
    def is_read_only(self) -> bool:
        return self._metadata.is_read_only

    # -- fetch ---------------------------------------------------------------

    async def fetch_entities(
        self, parameters: RestParameters | None
    ) -> FetchEntitiesResponse:
        params = parameters or RestParameters()
        stmt, count_stmt = build_fetch_statements(
            self._table, params, self._metadata.fields, registry=self._registry
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Fetch %s: %s", self._metadata.name, stmt)

        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            rows = [coerce_record(row, self._metadata) for row in result.mappings()]
            total = 0
            if count_stmt is not None:
                total = (await conn.execute(count_stmt)).scalar_one()
        return FetchEntitiesResponse(entities=rows, total_count=total)

    # -- writes --------------------------------------------------------------

    async def insert_entity(self, fields: Record) -> Record:
        """
        Insert one row and return its primary-key values.

        Key fields may be omitted when the backend generates them.

        Raises:
            DuplicateKeyError: If a row with the same primary key exists.
        """
        self._ensure_writable("insert")
        record = self._coerce(fields)
        key_fields = self._metadata.key_fields
        values = self._writable_values(record, include_keys=True)

        requested = {f.name: record.get(f.name) for f in key_fields}
        keyed = bool(key_fields) and all(v is not None for v in requested.values())
        try:
            async with self._engine.begin() as conn:
                if keyed and await self._key_exists(conn, record):
                    raise DuplicateKeyError(self._metadata.name, requested)
                result = await conn.execute(insert(self._table).values(values))
                generated = result.inserted_primary_key
        except IntegrityError as e:
            # A concurrent insert may have taken the key after the check.
            if keyed:
                async with self._engine.connect() as conn:
                    taken = await self._key_exists(conn, record)
                if taken:
                    logger.debug(
                        "Insert into %s lost a key race: %s",
                        self._metadata.name,
                        e.orig,
                    )
                    raise DuplicateKeyError(self._metadata.name, requested) from e
            raise

        key: Record = {}
        for index, f in enumerate(key_fields):
            value = record.get(f.name)
            if value is None and generated is not None and index < len(generated):
                value = generated[index]
            key[f.name] = value
        logger.debug("Inserted %s %r", self._metadata.name, key)
        return key

    async def update_entity(self, fields: Record) -> list[ValidationResult]:
        self._ensure_writable("update")
        record = self._coerce(fields)
        missing = missing_key_results(record, self._metadata)
        if missing:
            return missing

        values = self._writable_values(record, include_keys=False)
        async with self._engine.begin() as conn:
            if not values:
                found = await self._key_exists(conn, record)
                return [] if found else [self._not_found()]
            result = await conn.execute(
                update(self._table).where(self._key_clause(record)).values(values)
            )
            updated = result.rowcount
        return [] if updated else [self._not_found()]

    async def delete_entity(self, fields: Record) -> list[ValidationResult]:
        self._ensure_writable("delete")
        record = self._coerce(fields)
        missing = missing_key_results(record, self._metadata)
        if missing:
            return missing

        async with self._engine.begin() as conn:
            result = await conn.execute(
                delete(self._table).where(self._key_clause(record))
            )
            deleted = result.rowcount
        return [] if deleted else [self._not_found()]

    # -- helpers -------------------------------------------------------------

    def _ensure_writable(self, operation: str) -> None:
        if self.is_read_only:
            logger.warning(
                "Rejected %s on read-only entity %s", operation, self._metadata.name
            )
            raise UnsupportedOperationError(self._metadata.name, operation)

    def _coerce(self, fields: Record) -> Record:
        try:
            return coerce_record(fields, self._metadata)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    def _writable_values(self, record: Record, *, include_keys: bool) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for f in self._metadata.fields:
            if f.name not in record or f.is_read_only:
                continue
            if f.is_primary_key and (not include_keys or record[f.name] is None):
                continue
            values[f.name] = record[f.name]
        return values

    async def _key_exists(self, conn: AsyncConnection, record: Record) -> bool:
        found = await conn.execute(
            select(*self._key_columns()).where(self._key_clause(record))
        )
        return found.first() is not None

    def _key_columns(self) -> list[Any]:
        return [self._table.c[f.name] for f in self._metadata.key_fields]

    def _key_clause(self, record: Record) -> ColumnElement[bool]:
        return and_(
            *[self._table.c[f.name] == record[f.name] for f in self._metadata.key_fields]
        )

    def _not_found(self) -> ValidationResult:
        return ValidationResult(
            RECORD_NOT_FOUND, tuple(f.name for f in self._metadata.key_fields)
        )

"""SequentialEntityManager: CRUD over one indexed sequential file."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..exceptions import DuplicateKeyError, UnsupportedOperationError, ValidationError
from ..parameters import RestParameters
from ..ports import FetchEntitiesResponse, ValidationResult, missing_key_results
from ..values import coerce_record, key_of
from .compiler import build_record_predicate
from .sorting import sort_records

if TYPE_CHECKING:
    from ..metadata import EntityMetadata
    from ..values import Record
    from .evaluator import RecordOperatorRegistry
    from .ports import IIndexedFile

logger = logging.getLogger("metarest.sequential")

RECORD_NOT_FOUND = "Record not found"


class SequentialEntityManager:
    """
    Entity manager for backends that can only stream records in key order.

    Filtering runs in memory through a compiled record predicate.  Without
    a sort, records are streamed and the scan stops once ``take`` records
    were produced (unless a count is requested).  With a sort, the filtered
    set is materialized, sorted, counted and then sliced.
    """

    def __init__(
        self,
        file: IIndexedFile,
        *,
        registry: RecordOperatorRegistry | None = None,
        evaluate_all_children: bool = False,
        read_only: bool | None = None,
    ) -> None:
        self._file = file
        self._registry = registry
        self._evaluate_all_children = evaluate_all_children
        self._read_only = (
            file.metadata.is_read_only if read_only is None else read_only
        )

    @property
    def metadata(self) -> EntityMetadata:
        return self._file.metadata

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    # -- fetch ---------------------------------------------------------------

    async def fetch_entities(
        self, parameters: RestParameters | None
    ) -> FetchEntitiesResponse:
        params = parameters or RestParameters()
        fields = self.metadata.fields
        predicate = build_record_predicate(
            params.compose_filter(fields),
            fields,
            registry=self._registry,
            evaluate_all_children=self._evaluate_all_children,
        )

        if params.sort:
            response = await self._fetch_sorted(params, predicate)
        else:
            response = await self._fetch_streamed(params, predicate)

        logger.debug(
            "Fetched %d record(s) from %s (count=%d)",
            len(response.entities),
            self.metadata.name,
            response.total_count,
        )
        return response

    async def _fetch_streamed(
        self, params: RestParameters, predicate: Any
    ) -> FetchEntitiesResponse:
        entities: list[Record] = []
        matched = 0
        async for record in self._file.scan():
            if not predicate(record):
                continue
            matched += 1
            if matched <= params.skip:
                continue
            if not params.take or len(entities) < params.take:
                entities.append(self._project(record))
            elif not params.with_count:
                break
        return FetchEntitiesResponse(
            entities=entities, total_count=matched if params.with_count else 0
        )

    async def _fetch_sorted(
        self, params: RestParameters, predicate: Any
    ) -> FetchEntitiesResponse:
        matched = [record async for record in self._file.scan() if predicate(record)]
        ordered = sort_records(matched, params.sort, self.metadata.fields)
        end = params.skip + params.take if params.take else None
        return FetchEntitiesResponse(
            entities=[self._project(r) for r in ordered[params.skip : end]],
            total_count=len(matched) if params.with_count else 0,
        )

    def _project(self, record: Record) -> Record:
        return {f.name: record.get(f.name) for f in self.metadata.fields}

    # -- writes --------------------------------------------------------------

    async def insert_entity(self, fields: Record) -> Record:
        self._ensure_writable("insert")
        record = self._coerce(fields)
        missing = missing_key_results(record, self.metadata)
        if missing:
            raise ValidationError({r.member_names[0]: [r.message] for r in missing})

        key = self._key_dict(record)
        if await self._file.read(key_of(record, self.metadata)) is not None:
            raise DuplicateKeyError(self.metadata.name, key)

        await self._file.write(
            {f.name: record.get(f.name) for f in self.metadata.fields}
        )
        return key

    async def update_entity(self, fields: Record) -> list[ValidationResult]:
        self._ensure_writable("update")
        record = self._coerce(fields)
        missing = missing_key_results(record, self.metadata)
        if missing:
            return missing

        existing = await self._file.read(key_of(record, self.metadata))
        if existing is None:
            return [self._not_found()]

        for field in self.metadata.fields:
            if field.is_primary_key or field.is_read_only or field.name not in record:
                continue
            existing[field.name] = record[field.name]

        if not await self._file.rewrite(existing):
            return [self._not_found()]
        return []

    async def delete_entity(self, fields: Record) -> list[ValidationResult]:
        self._ensure_writable("delete")
        record = self._coerce(fields)
        missing = missing_key_results(record, self.metadata)
        if missing:
            return missing
        if not await self._file.delete(key_of(record, self.metadata)):
            return [self._not_found()]
        return []

    # -- helpers -------------------------------------------------------------

    def _ensure_writable(self, operation: str) -> None:
        if self._read_only:
            logger.warning(
                "Rejected %s on read-only entity %s", operation, self.metadata.name
            )
            raise UnsupportedOperationError(self.metadata.name, operation)

    def _coerce(self, fields: Record) -> Record:
        try:
            return coerce_record(fields, self.metadata)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    def _key_dict(self, record: Record) -> Record:
        return {f.name: record.get(f.name) for f in self.metadata.key_fields}

    def _not_found(self) -> ValidationResult:
        return ValidationResult(
            RECORD_NOT_FOUND, tuple(f.name for f in self.metadata.key_fields)
        )

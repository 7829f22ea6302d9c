"""
SQLDataContext discovers tables and views of a schema at runtime.

Reflection runs through ``AsyncConnection.run_sync`` with the SQLAlchemy
inspector.  Views become read-only entities, and so do tables without a
primary key.  Computed and identity columns become read-only fields.
Table and column comments become descriptions where the dialect reports
them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    String,
    Time,
    inspect,
)
from sqlalchemy.types import Boolean

from ..metadata import EntityMetadata, FieldDataType, FieldMetadata
from .manager import SQLEntityManager

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Inspector
    from sqlalchemy.ext.asyncio import AsyncEngine
    from sqlalchemy.types import TypeEngine

    from ..ports import IEntityManager
    from .strategy import SQLOperatorRegistry

logger = logging.getLogger("metarest.relational")

FLOAT_SCALE = 15


def map_column_type(sql_type: TypeEngine[Any]) -> tuple[FieldDataType, int, int]:
    """Map a reflected column type to ``(type, size, scale)``."""
    if isinstance(sql_type, DateTime):
        return FieldDataType.DATETIME, 0, 0
    if isinstance(sql_type, Date):
        return FieldDataType.DATE, 0, 0
    if isinstance(sql_type, Time):
        return FieldDataType.TIME, 0, 0
    if isinstance(sql_type, (Integer, Boolean)):
        return FieldDataType.NUMERIC, 0, 0
    if isinstance(sql_type, Float):
        return FieldDataType.NUMERIC, 0, FLOAT_SCALE
    if isinstance(sql_type, Numeric):
        return (
            FieldDataType.NUMERIC,
            sql_type.precision or 0,
            sql_type.scale or 0,
        )
    if isinstance(sql_type, LargeBinary):
        return FieldDataType.BYTE_ARRAY, getattr(sql_type, "length", None) or 0, 0
    if isinstance(sql_type, String):
        return FieldDataType.STRING, sql_type.length or 0, 0
    return FieldDataType.STRING, 0, 0


def _table_comment(inspector: Inspector, name: str, schema: str | None) -> str | None:
    try:
        return inspector.get_table_comment(name, schema=schema).get("text")
    except NotImplementedError:
        return None


def _field(column: dict[str, Any], primary_key: set[str]) -> FieldMetadata:
    kind, size, scale = map_column_type(column["type"])
    computed = column.get("computed") is not None
    identity = column.get("identity") is not None
    return FieldMetadata(
        name=column["name"],
        description=column.get("comment"),
        size=size,
        scale=scale,
        type=kind,
        is_required=(
            not column.get("nullable", True)
            and column.get("default") is None
            and not computed
            and not identity
        ),
        is_primary_key=column["name"] in primary_key,
        is_read_only=computed or identity,
    )


def reflect_entities(
    connection: Connection, schema: str | None = None
) -> list[EntityMetadata]:
    """Synchronous reflection body, run via ``run_sync``."""
    inspector = inspect(connection)
    entities: list[EntityMetadata] = []
    views = set(inspector.get_view_names(schema=schema))
    names = list(inspector.get_table_names(schema=schema)) + sorted(views)

    for name in names:
        is_view = name in views
        primary_key = set(
            inspector.get_pk_constraint(name, schema=schema).get(
                "constrained_columns"
            )
            or ()
        )
        fields = tuple(
            _field(column, primary_key)
            for column in inspector.get_columns(name, schema=schema)
        )
        entities.append(
            EntityMetadata(
                name=name,
                description=_table_comment(inspector, name, schema),
                is_read_only=is_view or not primary_key,
                fields=fields,
            )
        )
    return entities


class SQLDataContext:
    """Exposes every table and view of *schema* as an entity manager."""

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        schema: str | None = None,
        name: str | None = None,
        registry: SQLOperatorRegistry | None = None,
    ) -> None:
        self._engine = engine
        self._schema = schema
        self._name = name or engine.url.render_as_string(hide_password=True)
        self._registry = registry

    @property
    def name(self) -> str:
        return self._name

    async def fetch_entity_managers(self) -> list[IEntityManager]:
        async with self._engine.connect() as conn:
            entities = await conn.run_sync(reflect_entities, self._schema)
        logger.debug(
            "Reflected %d table(s) and view(s) from %s", len(entities), self._name
        )
        return [
            SQLEntityManager(
                metadata, self._engine, schema=self._schema, registry=self._registry
            )
            for metadata in entities
        ]

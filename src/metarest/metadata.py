"""Entity and field metadata discovered from a backend at runtime."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FieldDataType(str, Enum):
    """Storage-independent type of a field."""

    STRING = "String"
    DATE = "Date"
    TIME = "Time"
    DATETIME = "DateTime"
    NUMERIC = "Numeric"
    BYTE_ARRAY = "ByteArray"


class _MetadataModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self, *, camel_case: bool = True) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=camel_case)


class FieldMetadata(_MetadataModel):
    """Describes one field of an entity."""

    name: str
    description: str | None = None
    size: int = 0
    scale: int = 0
    type: FieldDataType = FieldDataType.STRING
    is_required: bool = False
    is_primary_key: bool = False
    is_read_only: bool = False


class EntityMetadata(_MetadataModel):
    """
    Describes one addressable resource: a table, a view or an indexed file.

    Created once per discovery cycle and never mutated afterwards.
    """

    name: str
    description: str | None = None
    is_read_only: bool = False
    fields: tuple[FieldMetadata, ...] = Field(default_factory=tuple)

    def get_field(self, name: str) -> FieldMetadata | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def key_fields(self) -> tuple[FieldMetadata, ...]:
        return tuple(f for f in self.fields if f.is_primary_key)

    @property
    def field_map(self) -> dict[str, FieldMetadata]:
        return {f.name: f for f in self.fields}

    def summary(self, *, camel_case: bool = True) -> dict[str, Any]:
        """Short form used by the ``$metadata`` listing."""
        return self.model_dump(
            mode="json",
            by_alias=camel_case,
            include={"name", "description", "is_read_only"},
        )


__all__: list[str] = ["EntityMetadata", "FieldDataType", "FieldMetadata"]

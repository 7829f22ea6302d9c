"""metarest: metadata-driven REST access to relational and sequential stores."""

from __future__ import annotations

from .dispatcher import (
    DataRequestHandler,
    DataRequestOptions,
    MetadataCache,
    RestMethod,
    RestRequest,
    RestResponse,
)
from .exceptions import (
    ConflictError,
    DuplicateKeyError,
    FilterParseError,
    MetaRestError,
    OperatorNotFoundError,
    RequestBodyError,
    UnsupportedOperationError,
    ValidationError,
)
from .filters import (
    FilterLogic,
    FilterOperator,
    RestFilter,
    SmartFilter,
    between_filter,
)
from .metadata import EntityMetadata, FieldDataType, FieldMetadata
from .parameters import (
    ParametersParser,
    QueryStringBuilder,
    RestParameters,
    RestSort,
    SortDirection,
    SortField,
)
from .ports import FetchEntitiesResponse, IDataContext, IEntityManager, ValidationResult

__all__ = [
    "ConflictError",
    "DataRequestHandler",
    "DataRequestOptions",
    "DuplicateKeyError",
    "EntityMetadata",
    "FetchEntitiesResponse",
    "FieldDataType",
    "FieldMetadata",
    "FilterLogic",
    "FilterOperator",
    "FilterParseError",
    "IDataContext",
    "IEntityManager",
    "MetaRestError",
    "MetadataCache",
    "OperatorNotFoundError",
    "ParametersParser",
    "QueryStringBuilder",
    "RequestBodyError",
    "RestFilter",
    "RestMethod",
    "RestParameters",
    "RestRequest",
    "RestResponse",
    "RestSort",
    "SmartFilter",
    "SortDirection",
    "SortField",
    "UnsupportedOperationError",
    "ValidationError",
    "ValidationResult",
    "between_filter",
]

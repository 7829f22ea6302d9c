"""Sequential backend: record predicates, in-memory sorting and the file adapter."""

from __future__ import annotations

from .compiler import build_record_predicate
from .data_context import SequentialDataContext
from .evaluator import RecordOperator, RecordOperatorRegistry
from .manager import SequentialEntityManager
from .memory import InMemoryIndexedFile, InMemoryIndexedFileSystem
from .operators import DEFAULT_RECORD_REGISTRY, build_default_registry
from .ports import IIndexedFile, IIndexedFileSystem
from .sorting import sort_records

__all__ = [
    "DEFAULT_RECORD_REGISTRY",
    "IIndexedFile",
    "IIndexedFileSystem",
    "InMemoryIndexedFile",
    "InMemoryIndexedFileSystem",
    "RecordOperator",
    "RecordOperatorRegistry",
    "SequentialDataContext",
    "SequentialEntityManager",
    "build_default_registry",
    "build_record_predicate",
    "sort_records",
]

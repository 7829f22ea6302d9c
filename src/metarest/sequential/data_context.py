"""SequentialDataContext: exposes every file of an indexed file system."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .manager import SequentialEntityManager

if TYPE_CHECKING:
    from ..ports import IEntityManager
    from .evaluator import RecordOperatorRegistry
    from .ports import IIndexedFileSystem


class SequentialDataContext:
    """Discovers one :class:`SequentialEntityManager` per indexed file."""

    def __init__(
        self,
        file_system: IIndexedFileSystem,
        *,
        name: str | None = None,
        registry: RecordOperatorRegistry | None = None,
        evaluate_all_children: bool = False,
    ) -> None:
        self._file_system = file_system
        self._name = name or "sequential"
        self._registry = registry
        self._evaluate_all_children = evaluate_all_children

    @property
    def name(self) -> str:
        return self._name

    async def fetch_entity_managers(self) -> list[IEntityManager]:
        return [
            SequentialEntityManager(
                file,
                registry=self._registry,
                evaluate_all_children=self._evaluate_all_children,
            )
            for file in await self._file_system.list_files()
        ]

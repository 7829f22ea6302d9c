"""
DataRequestHandler maps ``{root}/{entity}[/$metadata]`` requests onto
the entity managers of one data context.

State machine per request:

1. Split the path into root and entity name; a trailing ``$metadata``
   segment asks for metadata (of the entity, or of the whole root).
2. Load the entity managers through the :class:`MetadataCache`.
3. Resolve the entity by name: case-insensitive exact match first, then
   a match against entity names stripped of ``-`` and ``_``.
4. Route by verb and shape the response.

A request this handler cannot answer yields ``None`` so that the next
handler (or the application) can decide.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..exceptions import DuplicateKeyError, RequestBodyError, ValidationError
from ..parameters import RestParameters
from ..serialization import dump_json
from .cache import MetadataCache
from .extraction import decode_body, extract_fields
from .options import DataRequestOptions
from .request import METADATA_SEGMENT, RestMethod, RestRequest, RestResponse

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..ports import IDataContext, IEntityManager, ValidationResult

logger = logging.getLogger("metarest.dispatcher")

_WRITE_METHODS = frozenset(
    {RestMethod.POST, RestMethod.PUT, RestMethod.PATCH, RestMethod.DELETE}
)


def _strip_separators(name: str) -> str:
    return name.replace("-", "").replace("_", "")


def resolve_entity_manager(
    managers: Sequence[IEntityManager], entity_name: str
) -> IEntityManager | None:
    """
    Find the manager answering *entity_name*.

    ``UserAccount`` matches an entity named ``USER_ACCOUNT``.
    """
    wanted = entity_name.lower()
    for manager in managers:
        if manager.metadata.name.lower() == wanted:
            return manager
    for manager in managers:
        if _strip_separators(manager.metadata.name).lower() == wanted:
            return manager
    return None


def json_response(content: Any, status_code: int = 200) -> RestResponse:
    return RestResponse(status_code=status_code, content=dump_json(content))


class DataRequestHandler:
    """Serves the entities of one :class:`IDataContext` under one root path."""

    def __init__(
        self,
        root: str,
        data_context: IDataContext,
        *,
        cache: MetadataCache | None = None,
        options: DataRequestOptions | None = None,
    ) -> None:
        self.options = options or DataRequestOptions()
        self.root = [segment for segment in root.split("/") if segment]
        self.data_context = data_context
        self.cache = cache or MetadataCache(ttl=self.options.metadata_cache_ttl)

    # -- routing -------------------------------------------------------------

    def _route(self, request: RestRequest) -> tuple[str | None, bool] | None:
        """``(entity_name, is_metadata)`` for paths under the root, else ``None``."""
        segments = request.paths
        if len(segments) <= len(self.root):
            return None
        head = [s.lower() for s in segments[: len(self.root)]]
        if head != [s.lower() for s in self.root]:
            return None

        rest = segments[len(self.root) :]
        is_metadata = rest[-1] == METADATA_SEGMENT
        if is_metadata:
            rest = rest[:-1]
        if len(rest) > 1:
            return None
        if not rest:
            return (None, True) if is_metadata else None
        return rest[0], is_metadata

    async def entity_managers(self) -> list[IEntityManager]:
        return await self.cache.get_or_load(
            self.data_context.name, self.data_context.fetch_entity_managers
        )

    async def resolve(self, entity_name: str) -> IEntityManager | None:
        manager = resolve_entity_manager(await self.entity_managers(), entity_name)
        logger.debug(
            "Resolved entity %r to %s",
            entity_name,
            manager.metadata.name if manager is not None else None,
        )
        return manager

    async def can_handle(self, request: RestRequest) -> bool:
        """True for metadata requests under the root and for resolvable entities."""
        route = self._route(request)
        if route is None:
            return False
        entity_name, is_metadata = route
        if entity_name is None:
            return is_metadata
        return await self.resolve(entity_name) is not None

    # -- dispatch ------------------------------------------------------------

    async def handle(self, request: RestRequest) -> RestResponse | None:
        route = self._route(request)
        if route is None:
            return None
        entity_name, is_metadata = route
        camel_case = self.options.camel_case

        if entity_name is None:
            managers = await self.entity_managers()
            return json_response(
                [m.metadata.summary(camel_case=camel_case) for m in managers]
            )

        manager = await self.resolve(entity_name)
        if manager is None:
            return None
        if is_metadata:
            return json_response(manager.metadata.to_dict(camel_case=camel_case))

        method = RestMethod.parse(request.method)
        if method is None:
            return None
        if method in _WRITE_METHODS and manager.is_read_only:
            logger.warning(
                "%s on read-only entity %s left unhandled",
                method.value,
                manager.metadata.name,
            )
            return None

        try:
            return await self._dispatch(method, manager, request)
        except DuplicateKeyError as e:
            return json_response(e.to_dict(), status_code=409)
        except ValidationError as e:
            return json_response(e.to_dict(), status_code=400)

    async def _dispatch(
        self, method: RestMethod, manager: IEntityManager, request: RestRequest
    ) -> RestResponse:
        if method is RestMethod.GET:
            parameters = (
                self.options.parameters_parser.parse(request.query_string)
                or RestParameters()
            )
            result = await manager.fetch_entities(parameters)
            return json_response(result.to_dict())

        fields = extract_fields(decode_body(request.body), manager.metadata, method)
        if not fields:
            raise RequestBodyError({"body": ["No entity field found in the body"]})

        if method is RestMethod.POST:
            return json_response(await manager.insert_entity(fields))
        if method is RestMethod.DELETE:
            return self._results_response(await manager.delete_entity(fields))
        return self._results_response(await manager.update_entity(fields))

    def _results_response(self, results: list[ValidationResult]) -> RestResponse:
        if not results:
            return RestResponse(status_code=200)
        return json_response([r.to_dict() for r in results], status_code=400)

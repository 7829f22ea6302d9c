"""FastAPI / Starlette middleware serving metarest handlers.

Wraps each inbound request into a :class:`RestRequest` and offers it to
the registered handlers in order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ...dispatcher import RestRequest

if TYPE_CHECKING:
    from collections.abc import Sequence

    from starlette.requests import Request

    from ...dispatcher import DataRequestHandler, RestResponse

logger = logging.getLogger("metarest.middleware")


class RestMiddleware(BaseHTTPMiddleware):
    """Middleware that answers requests through a chain of handlers.

    Order of Operations:
    1. Conversion: Build a ``RestRequest`` from method, path, query and body.
    2. Chain: Ask each handler in turn; the first response wins.
    3. Fallthrough: No response: call_next (the app decides, e.g. 404).

    Example:
        ```python
        from fastapi import FastAPI
        from metarest.contrib.fastapi import RestMiddleware
        from metarest.dispatcher import DataRequestHandler
        from metarest.relational import SQLDataContext

        app = FastAPI()
        app.add_middleware(
            RestMiddleware,
            handlers=[DataRequestHandler("hr", SQLDataContext(engine))],
        )
        ```
    """

    def __init__(self, app: Any, *, handlers: Sequence[DataRequestHandler]) -> None:
        super().__init__(app)
        self.handlers = list(handlers)

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        rest_request = RestRequest(
            method=request.method,
            path=request.url.path,
            query_string=request.url.query,
            body=await request.body(),
        )

        for handler in self.handlers:
            try:
                response = await handler.handle(rest_request)
            except Exception:
                logger.exception(
                    "Handler failed for %s %s", request.method, request.url.path
                )
                raise
            if response is not None:
                return self._to_starlette(response)

        return cast("Response", await call_next(request))

    @staticmethod
    def _to_starlette(response: RestResponse) -> Response:
        return Response(
            content=response.content,
            status_code=response.status_code,
            headers=response.headers or None,
            media_type=response.media_type if response.content is not None else None,
        )

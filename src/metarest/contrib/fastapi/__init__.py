"""FastAPI / Starlette integration."""

from __future__ import annotations

from .middleware import RestMiddleware

__all__ = ["RestMiddleware"]

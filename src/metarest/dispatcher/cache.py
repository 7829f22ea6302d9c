"""MetadataCache: sliding-expiration cache with single-flight refresh."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from .options import DEFAULT_METADATA_CACHE_TTL

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("metarest.cache")


@dataclass
class _Entry:
    value: Any
    expires_at: float


class MetadataCache:
    """
    Cache of discovered entity managers, keyed by data context name.

    Every hit slides the expiration forward.  A miss (or an expired entry)
    is refreshed under a per-key lock so that concurrent callers share one
    discovery call; readers never see a partially-built value.  A failed
    refresh is not cached and the exception propagates to every waiter
    that attempts it.
    """

    def __init__(
        self,
        ttl: timedelta | float = DEFAULT_METADATA_CACHE_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _fresh(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        now = self._clock()
        if entry.expires_at <= now:
            return None
        entry.expires_at = now + self._ttl
        return entry

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value for *key*, loading it with *loader* if needed."""
        entry = self._fresh(key)
        if entry is not None:
            logger.debug("Metadata cache hit: %s", key)
            return entry.value

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            entry = self._fresh(key)
            if entry is not None:
                return entry.value

            started = self._clock()
            value = await loader()
            finished = self._clock()
            self._entries[key] = _Entry(value=value, expires_at=finished + self._ttl)
            logger.info(
                "Refreshed metadata for %s (%d entities, %.3fs)",
                key,
                len(value) if hasattr(value, "__len__") else -1,
                finished - started,
            )
            return value

    def invalidate(self, key: str | None = None) -> None:
        """Drop *key*, or every entry when *key* is ``None``."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    # ── Test helpers ─────────────────────────────────────────────

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

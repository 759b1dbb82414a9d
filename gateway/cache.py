"""
Per-scope, time-bounded memo for volatile upstream results.

One PresenceCache is built per process (in the lifespan) and injected into
handlers. An entry is served while `now - stored_at < ttl`; a miss runs the
refresh coroutine, and concurrent misses for the same scope await that one
refresh instead of starting their own.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Tuple

from cachetools import TTLCache
from loguru import logger

from gateway.config import PRESENCE_CACHE_TTL_MS


class PresenceCache:
    def __init__(
        self,
        ttl_ms: int = PRESENCE_CACHE_TTL_MS,
        maxsize: int = 128,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.ttl_ms = ttl_ms
        self._timer = timer
        # TTLCache drops an item once timer() >= stored_at + ttl
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_ms / 1000.0, timer=timer)
        self._in_flight: Dict[str, asyncio.Future] = {}
        self.refresh_count = 0

    async def get_or_refresh(self, scope: str, refresh: Callable[[], Awaitable[Any]]) -> Tuple[Any, bool]:
        """Return (payload, cached). `cached` is False whenever this call waited on a refresh."""
        payload = self._entries.get(scope)
        if payload is not None:
            logger.debug(f"Presence cache hit for scope={scope}")
            return payload, True

        pending = self._in_flight.get(scope)
        if pending is None:
            # No await between the lookup above and this registration
            pending = asyncio.ensure_future(self._refresh(scope, refresh))
            self._in_flight[scope] = pending
            # retrieve the outcome even if every waiter was cancelled
            pending.add_done_callback(lambda f: f.cancelled() or f.exception())
        else:
            logger.debug(f"Joining in-flight presence refresh for scope={scope}")

        # shield: one cancelled requester must not cancel the shared refresh
        return await asyncio.shield(pending), False

    async def _refresh(self, scope: str, refresh: Callable[[], Awaitable[Any]]) -> Any:
        started = self._timer()
        try:
            payload = await refresh()
            self._entries[scope] = payload
            self.refresh_count += 1
            logger.info(f"Presence cache refreshed for scope={scope} in {(self._timer() - started) * 1000:.0f}ms")
            return payload
        finally:
            self._in_flight.pop(scope, None)

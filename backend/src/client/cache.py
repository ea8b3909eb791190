"""
Client-side response cache keyed by resource path.

Entries are observable: subscribers are called after every change to an entry,
whether it came from a fetch or from a local (optimistic) write. Concurrent
revalidations of the same key share one request.
"""
import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from client.errors import ApiError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[Any]]
Listener = Callable[[str, "CacheEntry"], None]


@dataclass
class CacheEntry:
    """State of one cached resource."""

    data: Any = None
    error: Exception | None = None
    is_validating: bool = False
    has_data: bool = False
    fetched_at: float | None = None

    @property
    def is_loading(self) -> bool:
        """A request is in flight and nothing has been loaded yet."""
        return self.is_validating and not self.has_data


class ResourceCache:
    """Observable cache of API responses with manual invalidation."""

    # Revalidations within this many seconds of the last fetch reuse the result
    DEDUPE_INTERVAL = 2.0

    def __init__(
        self,
        fetcher: Fetcher,
        dedupe_interval: float = DEDUPE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._dedupe_interval = dedupe_interval
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._listeners: dict[str, list[Listener]] = {}
        self._inflight: dict[str, asyncio.Task] = {}

    def entry(self, key: str) -> CacheEntry:
        """Return the entry for `key`, creating an empty one if needed."""
        if key not in self._entries:
            self._entries[key] = CacheEntry()
        return self._entries[key]

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """Register a change listener for `key`. Returns an unsubscribe function."""
        listeners = self._listeners.setdefault(key, [])
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: str) -> None:
        entry = self.entry(key)
        for listener in list(self._listeners.get(key, [])):
            listener(key, entry)

    def set(self, key: str, data: Any) -> None:
        """Write data locally without a request (used for optimistic updates)."""
        entry = self.entry(key)
        entry.data = data
        entry.has_data = True
        entry.error = None
        self._notify(key)

    def is_fresh(self, key: str) -> bool:
        """True if `key` was fetched within the dedupe interval."""
        entry = self.entry(key)
        if entry.fetched_at is None:
            return False
        return self._clock() - entry.fetched_at < self._dedupe_interval

    async def revalidate(self, key: str, force: bool = False) -> Any:
        """
        Fetch `key` and store the result.

        Failures are stored on the entry's `error` and the previous data is
        kept; they are never raised. Returns the entry's data afterwards.
        """
        if not force and self.is_fresh(key):
            return self.entry(key).data

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(key))
            self._inflight[key] = task
            task.add_done_callback(lambda _t: self._inflight.pop(key, None))
        await task
        return self.entry(key).data

    async def _fetch(self, key: str) -> None:
        entry = self.entry(key)
        entry.is_validating = True
        self._notify(key)
        try:
            data = await self._fetcher(key)
        except (ApiError, httpx.HTTPError) as e:
            logger.debug("Revalidation of %s failed: %s", key, e)
            entry.error = e
        else:
            entry.data = data
            entry.has_data = True
            entry.error = None
            entry.fetched_at = self._clock()
        finally:
            entry.is_validating = False
        self._notify(key)

    def invalidate(self, key: str) -> None:
        """Mark `key` as stale so the next revalidation always fetches."""
        self.entry(key).fetched_at = None

    def clear(self) -> None:
        """Drop every entry (e.g. after sign-out). Listeners stay registered."""
        self._entries.clear()

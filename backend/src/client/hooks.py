"""
Per-resource data hooks over a shared ResourceCache.

A hook binds one resource path to a revalidation policy and exposes
`data`, `error`, `is_loading` and `mutate()` to UI code. Near-static
resources (catalog, single movie, featured pick, favorites) never refetch on
their own; the current user does.
"""
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from client.cache import CacheEntry, Listener, ResourceCache
from client.fetcher import (
    CURRENT_USER_PATH,
    FAVORITES_PATH,
    MOVIES_PATH,
    RANDOM_PATH,
    movie_path,
)


@dataclass(frozen=True)
class RevalidationPolicy:
    """When a hook refetches data it already has."""

    revalidate_if_stale: bool = True
    revalidate_on_focus: bool = True
    revalidate_on_reconnect: bool = True


DEFAULT_POLICY = RevalidationPolicy()
NEAR_STATIC = RevalidationPolicy(
    revalidate_if_stale=False,
    revalidate_on_focus=False,
    revalidate_on_reconnect=False,
)

_UNSET: Any = object()


class DataHook:
    """
    View of one cached resource.

    A hook whose key is None is disabled: it never issues a request and its
    data stays at the fallback.
    """

    def __init__(
        self,
        cache: ResourceCache,
        key: str | None,
        policy: RevalidationPolicy = DEFAULT_POLICY,
        empty: Callable[[], Any] | None = None,
    ) -> None:
        self.cache = cache
        self.key = key
        self.policy = policy
        self._empty = empty

    def _entry(self) -> CacheEntry | None:
        return self.cache.entry(self.key) if self.key is not None else None

    @property
    def data(self) -> Any:
        """Cached data, or the fallback (empty list for list hooks, else None)."""
        entry = self._entry()
        if entry is not None and entry.has_data and entry.data is not None:
            return entry.data
        return self._empty() if self._empty else None

    @property
    def error(self) -> Exception | None:
        """Error from the most recent failed fetch, cleared by the next success."""
        entry = self._entry()
        return entry.error if entry is not None else None

    @property
    def is_loading(self) -> bool:
        """True while the first fetch is in flight."""
        entry = self._entry()
        return entry.is_loading if entry is not None else False

    async def load(self) -> Any:
        """
        Mount the hook: fetch unless cached data may be reused.

        Cached data is reused as-is when the policy disables stale revalidation.
        """
        if self.key is None:
            return self.data
        entry = self.cache.entry(self.key)
        if not entry.has_data:
            await self.cache.revalidate(self.key)
        elif self.policy.revalidate_if_stale:
            await self.cache.revalidate(self.key)
        return self.data

    async def on_focus(self) -> None:
        """Window regained focus."""
        if self.key is not None and self.policy.revalidate_on_focus:
            await self.cache.revalidate(self.key)

    async def on_reconnect(self) -> None:
        """Network connectivity came back."""
        if self.key is not None and self.policy.revalidate_on_reconnect:
            await self.cache.revalidate(self.key)

    async def mutate(self, data: Any = _UNSET, revalidate: bool = True) -> Any:
        """
        Update the cached value and optionally refetch it.

        With `data`, the new value is visible to subscribers immediately, before
        any request. With `revalidate`, the resource is then fetched from the
        server regardless of how recently it was loaded.
        """
        if self.key is None:
            return self.data
        if data is not _UNSET:
            self.cache.set(self.key, data)
        if revalidate:
            await self.cache.revalidate(self.key, force=True)
        return self.data

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` whenever this resource changes."""
        if self.key is None:
            return lambda: None
        return self.cache.subscribe(self.key, listener)


def use_movie_list(cache: ResourceCache) -> DataHook:
    """The whole catalog."""
    return DataHook(cache, MOVIES_PATH, NEAR_STATIC, empty=list)


def use_movie(cache: ResourceCache, movie_id: str | None) -> DataHook:
    """A single movie; disabled until a movie id is known."""
    key = movie_path(movie_id) if movie_id else None
    return DataHook(cache, key, NEAR_STATIC)


def use_billboard(cache: ResourceCache) -> DataHook:
    """The featured (random) movie."""
    return DataHook(cache, RANDOM_PATH, NEAR_STATIC)


def use_favorites(cache: ResourceCache) -> DataHook:
    """Movies in the current user's favorites."""
    return DataHook(cache, FAVORITES_PATH, NEAR_STATIC, empty=list)


def use_current_user(cache: ResourceCache) -> DataHook:
    """The signed-in user; revalidates on focus, reconnect and mount."""
    return DataHook(cache, CURRENT_USER_PATH, DEFAULT_POLICY)

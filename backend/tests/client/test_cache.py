"""Tests for the observable response cache."""
import asyncio

import httpx

from client.cache import CacheEntry, ResourceCache
from client.errors import ApiError


class FakeFetcher:
    """Fetcher that returns queued results and counts calls."""

    def __init__(self, *results: object, delay: float = 0) -> None:
        self.results = list(results)
        self.calls: list[str] = []
        self.delay = delay

    async def __call__(self, key: str) -> object:
        self.calls.append(key)
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


async def test__revalidate__stores_data() -> None:
    fetcher = FakeFetcher(["a"])
    cache = ResourceCache(fetcher)

    assert await cache.revalidate("/movies") == ["a"]
    entry = cache.entry("/movies")
    assert entry.has_data
    assert entry.error is None
    assert not entry.is_loading


async def test__concurrent_revalidations_share_one_request() -> None:
    fetcher = FakeFetcher(["a"], delay=0.01)
    cache = ResourceCache(fetcher)

    results = await asyncio.gather(
        cache.revalidate("/movies", force=True),
        cache.revalidate("/movies", force=True),
        cache.revalidate("/movies", force=True),
    )

    assert results == [["a"], ["a"], ["a"]]
    assert fetcher.calls == ["/movies"]


async def test__recent_fetch_is_reused_unless_forced() -> None:
    now = [100.0]
    fetcher = FakeFetcher(["a"], ["b"])
    cache = ResourceCache(fetcher, dedupe_interval=2.0, clock=lambda: now[0])

    await cache.revalidate("/movies")
    now[0] += 1.0
    assert await cache.revalidate("/movies") == ["a"]
    assert len(fetcher.calls) == 1

    assert await cache.revalidate("/movies", force=True) == ["b"]
    assert len(fetcher.calls) == 2


async def test__stale_after_dedupe_interval() -> None:
    now = [0.0]
    fetcher = FakeFetcher(["a"], ["b"])
    cache = ResourceCache(fetcher, dedupe_interval=2.0, clock=lambda: now[0])

    await cache.revalidate("/movies")
    now[0] += 5.0
    assert await cache.revalidate("/movies") == ["b"]


async def test__failure_keeps_previous_data_and_sets_error() -> None:
    error = ApiError(400)
    fetcher = FakeFetcher(["a"], error)
    cache = ResourceCache(fetcher)

    await cache.revalidate("/movies")
    assert await cache.revalidate("/movies", force=True) == ["a"]

    entry = cache.entry("/movies")
    assert entry.error is error
    assert entry.data == ["a"]


async def test__transport_error_is_stored_not_raised() -> None:
    fetcher = FakeFetcher(httpx.ConnectError("down"))
    cache = ResourceCache(fetcher)

    assert await cache.revalidate("/movies") is None
    assert isinstance(cache.entry("/movies").error, httpx.ConnectError)


async def test__success_clears_previous_error() -> None:
    fetcher = FakeFetcher(ApiError(400), ["a"])
    cache = ResourceCache(fetcher)

    await cache.revalidate("/movies")
    await cache.revalidate("/movies", force=True)
    assert cache.entry("/movies").error is None


async def test__subscribers_see_loading_then_data() -> None:
    cache = ResourceCache(FakeFetcher(["a"]))
    seen: list[tuple[bool, object]] = []

    def listener(_key: str, entry: CacheEntry) -> None:
        seen.append((entry.is_loading, entry.data))

    cache.subscribe("/movies", listener)
    await cache.revalidate("/movies")

    assert seen == [(True, None), (False, ["a"])]


async def test__set_notifies_without_fetching() -> None:
    fetcher = FakeFetcher()
    cache = ResourceCache(fetcher)
    seen = []
    unsubscribe = cache.subscribe("/current", lambda _k, e: seen.append(e.data))

    cache.set("/current", {"id": "u1"})
    unsubscribe()
    cache.set("/current", {"id": "u2"})

    assert seen == [{"id": "u1"}]
    assert fetcher.calls == []


async def test__invalidate_forces_next_fetch() -> None:
    fetcher = FakeFetcher(["a"], ["b"])
    cache = ResourceCache(fetcher, dedupe_interval=60)

    await cache.revalidate("/movies")
    cache.invalidate("/movies")
    assert await cache.revalidate("/movies") == ["b"]


async def test__clear_drops_entries() -> None:
    cache = ResourceCache(FakeFetcher())
    cache.set("/current", {"id": "u1"})
    cache.clear()
    assert not cache.entry("/current").has_data

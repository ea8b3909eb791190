"""Fixtures for client hook tests."""
from collections.abc import AsyncGenerator

import httpx
import pytest
import respx

from client.cache import ResourceCache
from client.fetcher import ApiClient

BASE_URL = "http://movies.test"


@pytest.fixture
def mock_api() -> respx.MockRouter:
    """Context manager for mocking API responses."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
async def api(mock_api: respx.MockRouter) -> AsyncGenerator[ApiClient]:  # noqa: ARG001
    """ApiClient pointed at the mocked API."""
    async with httpx.AsyncClient(base_url=BASE_URL) as http:
        yield ApiClient(http, session_token="test-token")


@pytest.fixture
def cache(api: ApiClient) -> ResourceCache:
    """Response cache backed by the mocked API."""
    return ResourceCache(api.get_json)

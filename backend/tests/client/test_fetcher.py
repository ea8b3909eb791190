"""Tests for the ApiClient HTTP helpers."""
import json

import httpx
import pytest
import respx
from httpx import Response

from client.errors import ApiError
from client.fetcher import ApiClient, movie_path
from tests.client.conftest import BASE_URL


async def test__get_json__sends_bearer_token(mock_api: respx.MockRouter, api: ApiClient) -> None:
    mock_api.get("/movies").mock(return_value=Response(200, json=[]))

    assert await api.get_json("/movies") == []
    assert mock_api.calls[0].request.headers["authorization"] == "Bearer test-token"


async def test__get_json__null_body_returns_none(
    mock_api: respx.MockRouter,
    api: ApiClient,
) -> None:
    mock_api.get("/random").mock(return_value=Response(200, json=None))
    assert await api.get_json("/random") is None


async def test__delete_json__sends_body(mock_api: respx.MockRouter, api: ApiClient) -> None:
    mock_api.delete("/favorite").mock(return_value=Response(200, json={"favoriteIds": []}))

    result = await api.delete_json("/favorite", {"movieId": "m1"})

    assert result == {"favoriteIds": []}
    assert json.loads(mock_api.calls[0].request.content) == {"movieId": "m1"}


async def test__post_json__error_raises_api_error(
    mock_api: respx.MockRouter,
    api: ApiClient,
) -> None:
    mock_api.post("/register").mock(return_value=Response(422, json={"error": "Email taken"}))

    with pytest.raises(ApiError) as exc_info:
        await api.post_json("/register", {"email": "a@example.com"})

    assert exc_info.value.status_code == 422
    assert exc_info.value.message == "Email taken"


async def test__error_with_empty_body_uses_reason_phrase(
    mock_api: respx.MockRouter,
    api: ApiClient,
) -> None:
    mock_api.put("/movies").mock(return_value=Response(405))

    with pytest.raises(ApiError) as exc_info:
        await api._request("PUT", "/movies")

    assert exc_info.value.body is None
    assert exc_info.value.message == "Method Not Allowed"


async def test__unauthenticated_error_flag(mock_api: respx.MockRouter, api: ApiClient) -> None:
    mock_api.get("/current").mock(return_value=Response(401, json={"detail": "Not signed in"}))

    with pytest.raises(ApiError) as exc_info:
        await api.get_json("/current")

    assert exc_info.value.is_unauthenticated
    assert exc_info.value.message == "Not signed in"


async def test__login__stores_token(mock_api: respx.MockRouter) -> None:
    mock_api.post("/auth/login").mock(
        return_value=Response(200, json={"token": "fresh", "user": {"id": "u1"}}),
    )
    mock_api.get("/current").mock(return_value=Response(200, json={"id": "u1"}))

    async with httpx.AsyncClient(base_url=BASE_URL) as http:
        api = ApiClient(http)
        user = await api.login("a@example.com", "pw")
        assert user == {"id": "u1"}
        assert api.session_token == "fresh"

        await api.get_json("/current")

    assert mock_api.calls[-1].request.headers["authorization"] == "Bearer fresh"


async def test__logout__forgets_token(mock_api: respx.MockRouter, api: ApiClient) -> None:
    mock_api.post("/auth/logout").mock(return_value=Response(204))

    await api.logout()

    assert api.session_token is None


async def test__no_token_sends_no_authorization_header(mock_api: respx.MockRouter) -> None:
    mock_api.get("/movies").mock(return_value=Response(401))

    async with httpx.AsyncClient(base_url=BASE_URL) as http:
        with pytest.raises(ApiError):
            await ApiClient(http).get_json("/movies")

    assert "authorization" not in mock_api.calls[0].request.headers


def test__movie_path() -> None:
    assert movie_path("abc") == "/movies/abc"

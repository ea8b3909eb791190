"""Client hooks exercised against the real application over ASGI."""
from httpx import AsyncClient

from client.cache import ResourceCache
from client.favorites import toggle_favorite
from client.fetcher import ApiClient
from client.hooks import use_billboard, use_current_user, use_favorites, use_movie, use_movie_list
from models.user import User
from tests.conftest import TEST_PASSWORD


async def test_sign_in_browse_and_toggle_favorite(
    client: AsyncClient,
    user: User,
    make_movie,
) -> None:
    """User signs in, browses, favorites M1, sees it listed, then unfavorites it."""
    movie = await make_movie("M1")

    api = ApiClient(client)
    await api.login(user.email, TEST_PASSWORD)
    cache = ResourceCache(api.get_json)

    current_user = use_current_user(cache)
    favorites = use_favorites(cache)

    assert [m["id"] for m in await use_movie_list(cache).load()] == [movie.id]
    assert (await use_billboard(cache).load())["id"] == movie.id
    assert (await use_movie(cache, movie.id).load())["title"] == "M1"
    assert await favorites.load() == []
    assert (await current_user.load())["id"] == user.id

    updated = await toggle_favorite(api, current_user, favorites, movie.id)
    assert updated["favoriteIds"] == [movie.id]
    assert [m["id"] for m in favorites.data] == [movie.id]

    await toggle_favorite(api, current_user, favorites, movie.id)
    assert current_user.data["favoriteIds"] == []
    assert favorites.data == []


async def test_signed_out_hooks_expose_unauthenticated_error(client: AsyncClient) -> None:
    cache = ResourceCache(ApiClient(client).get_json)

    movies = use_movie_list(cache)
    assert await movies.load() == []
    assert movies.error is not None
    assert movies.error.status_code == 401

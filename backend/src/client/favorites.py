"""Favorite toggle with an optimistic update of the current-user cache."""
import logging
from typing import Any

import httpx

from client.errors import ApiError
from client.fetcher import FAVORITE_PATH, ApiClient
from client.hooks import DataHook

logger = logging.getLogger(__name__)


def is_favorite(user: dict[str, Any] | None, movie_id: str) -> bool:
    """True if `movie_id` is in the user's favoriteIds."""
    if not user:
        return False
    return movie_id in (user.get("favoriteIds") or [])


async def toggle_favorite(
    api: ApiClient,
    current_user: DataHook,
    favorites: DataHook,
    movie_id: str,
) -> dict[str, Any]:
    """
    Add or remove `movie_id` from the signed-in user's favorites.

    The current-user cache is updated before the request is sent, then replaced
    with the server's copy of the user and revalidated. If the request fails the
    previous user is restored and the error is raised. The favorites list is
    revalidated after a successful change.

    Returns:
        The updated user as returned by the server.
    """
    user = current_user.data
    if user is None:
        user = await current_user.load()
    if user is None:
        raise current_user.error or ApiError(401, {"detail": "Not signed in"})

    favorite_ids = list(user.get("favoriteIds") or [])
    removing = movie_id in favorite_ids
    if removing:
        optimistic_ids = [fid for fid in favorite_ids if fid != movie_id]
    else:
        optimistic_ids = [*favorite_ids, movie_id]
    await current_user.mutate({**user, "favoriteIds": optimistic_ids}, revalidate=False)

    try:
        if removing:
            updated = await api.delete_json(FAVORITE_PATH, {"movieId": movie_id})
        else:
            updated = await api.post_json(FAVORITE_PATH, {"movieId": movie_id})
    except (ApiError, httpx.HTTPError):
        logger.debug("Favorite toggle for %s failed, restoring previous state", movie_id)
        await current_user.mutate(user, revalidate=False)
        raise

    await current_user.mutate(
        {**user, "favoriteIds": updated.get("favoriteIds", [])},
    )
    await favorites.mutate()
    return updated

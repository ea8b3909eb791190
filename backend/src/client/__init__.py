"""Async Python client for the Movies API: fetcher, response cache and data hooks."""
from client.cache import CacheEntry, ResourceCache
from client.errors import ApiError
from client.favorites import is_favorite, toggle_favorite
from client.fetcher import ApiClient
from client.hooks import (
    DEFAULT_POLICY,
    NEAR_STATIC,
    DataHook,
    RevalidationPolicy,
    use_billboard,
    use_current_user,
    use_favorites,
    use_movie,
    use_movie_list,
)
from client.modal import InfoModalState, InfoModalStore

__all__ = [
    "DEFAULT_POLICY",
    "NEAR_STATIC",
    "ApiClient",
    "ApiError",
    "CacheEntry",
    "DataHook",
    "InfoModalState",
    "InfoModalStore",
    "ResourceCache",
    "RevalidationPolicy",
    "is_favorite",
    "toggle_favorite",
    "use_billboard",
    "use_current_user",
    "use_favorites",
    "use_movie",
    "use_movie_list",
]

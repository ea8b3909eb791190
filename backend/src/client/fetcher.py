"""HTTP client helpers for calling the Movies API."""
import logging
from typing import Any

import httpx

from client.errors import ApiError

logger = logging.getLogger(__name__)

# Resource paths
MOVIES_PATH = "/movies"
RANDOM_PATH = "/random"
FAVORITES_PATH = "/favorites"
FAVORITE_PATH = "/favorite"
CURRENT_USER_PATH = "/current"
REGISTER_PATH = "/register"
LOGIN_PATH = "/auth/login"
LOGOUT_PATH = "/auth/logout"


def movie_path(movie_id: str) -> str:
    """Path of a single movie resource."""
    return f"{MOVIES_PATH}/{movie_id}"


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """
    Thin JSON wrapper around an `httpx.AsyncClient`.

    The session travels in the client's cookie jar after `login()`, or as a
    Bearer header when a token is supplied directly. Timeouts and connection
    errors come from httpx unchanged.
    """

    def __init__(self, http: httpx.AsyncClient, session_token: str | None = None) -> None:
        self._http = http
        self.session_token = session_token

    def _headers(self) -> dict[str, str]:
        if self.session_token:
            return {"Authorization": f"Bearer {self.session_token}"}
        return {}

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = await self._http.request(
            method,
            path,
            json=json,
            headers=self._headers(),
        )
        body = _parse_body(response)
        if response.is_error:
            logger.debug("%s %s failed with %s", method, path, response.status_code)
            raise ApiError(response.status_code, body)
        return body

    async def get_json(self, path: str) -> Any:
        """GET a resource and return its decoded JSON body."""
        return await self._request("GET", path)

    async def post_json(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """POST a JSON body and return the decoded response."""
        return await self._request("POST", path, json=json)

    async def delete_json(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """DELETE with a JSON body and return the decoded response."""
        return await self._request("DELETE", path, json=json)

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Sign in with credentials and remember the session token."""
        result = await self.post_json(LOGIN_PATH, {"email": email, "password": password})
        self.session_token = result["token"]
        return result["user"]

    async def logout(self) -> None:
        """Sign out and forget the session token."""
        await self.post_json(LOGOUT_PATH)
        self.session_token = None
        self._http.cookies.clear()

    async def register(self, email: str, name: str, password: str) -> dict[str, Any]:
        """Create a credentials account. Does not sign in."""
        return await self.post_json(
            REGISTER_PATH,
            {"email": email, "name": name, "password": password},
        )

"""Errors raised by the API client."""
from typing import Any

import httpx


class ApiError(Exception):
    """
    A non-2xx response from the API.

    Attributes:
        status_code: HTTP status of the response.
        body: Parsed JSON body, the raw text if it wasn't JSON, or None if empty.
    """

    def __init__(self, status_code: int, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {self.message}")

    @property
    def message(self) -> str:
        """Best-effort human readable message from the response body."""
        if isinstance(self.body, dict):
            for field in ("detail", "error"):
                value = self.body.get(field)
                if isinstance(value, str) and value:
                    return value
        if isinstance(self.body, str) and self.body:
            return self.body
        return httpx.codes.get_reason_phrase(self.status_code) or "Unknown error"

    @property
    def is_unauthenticated(self) -> bool:
        """True when the session is missing, expired, or references a deleted account."""
        return self.status_code == 401

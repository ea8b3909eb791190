"""Pydantic schemas for credentials sign-in and session endpoints."""
from pydantic import BaseModel

from schemas.base import CamelModel
from schemas.user import UserResponse


class LoginRequest(BaseModel):
    """
    Credentials sign-in body.

    Both fields are optional here so that a missing value produces the
    "Email and password required" message instead of a generic validation error.
    """

    email: str | None = None
    password: str | None = None


class LoginResponse(CamelModel):
    """Response for a successful sign-in."""

    token: str
    user: UserResponse


class SessionStatus(CamelModel):
    """Lightweight session check used to gate pages before rendering."""

    authenticated: bool
    email: str | None = None

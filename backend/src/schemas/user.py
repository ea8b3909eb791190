"""Pydantic schemas for user, registration, and favorite endpoints."""
from datetime import datetime

from pydantic import Field, field_validator

from schemas.base import CamelModel


# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class UserRegister(CamelModel):
    """Request body for credentials registration."""

    email: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return v


class FavoriteRequest(CamelModel):
    """Request body for adding or removing a favorite: {"movieId": "..."}."""

    movie_id: str = Field(min_length=1)


class UserResponse(CamelModel):
    """
    Schema for a user in API responses.

    The password hash is never serialized.
    """

    id: str
    email: str
    name: str | None
    image: str | None
    email_verified: datetime | None
    favorite_ids: list[str]
    created_at: datetime
    updated_at: datetime

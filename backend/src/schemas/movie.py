"""Pydantic schemas for movie endpoints."""
from pydantic import Field

from schemas.base import CamelModel


class MovieCreate(CamelModel):
    """Schema for adding a movie to the catalog (seeding only)."""

    title: str = Field(min_length=1, max_length=500)
    description: str
    video_url: str = Field(min_length=1, max_length=2048)
    thumbnail_url: str = Field(min_length=1, max_length=2048)
    genre: str = Field(min_length=1, max_length=100)
    duration: str = Field(min_length=1, max_length=50)


class MovieResponse(CamelModel):
    """Schema for a movie in API responses."""

    id: str
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    genre: str
    duration: str

"""SQLAlchemy models."""
from models.base import Base, StringIdMixin, TimestampMixin
from models.movie import Movie
from models.user import User

__all__ = [
    "Base",
    "Movie",
    "StringIdMixin",
    "TimestampMixin",
    "User",
]

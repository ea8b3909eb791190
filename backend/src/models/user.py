"""User model for storing registered and OAuth-created accounts."""
from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, StringIdMixin, TimestampMixin


class User(Base, StringIdMixin, TimestampMixin):
    """
    User model.

    favorite_ids is an ordered list of movie ids stored on the user row itself.
    Duplicates are not rejected. Always assign a new list rather than mutating
    the existing one so the ORM detects the change.
    """

    __tablename__ = "users"

    # id provided by StringIdMixin
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    email_verified: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    hashed_password: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="bcrypt hash; NULL for accounts created through an OAuth provider",
    )
    favorite_ids: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

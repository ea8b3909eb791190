"""Movie model for the catalog."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, StringIdMixin


class Movie(Base, StringIdMixin):
    """
    Movie model.

    Rows are seeded externally and never changed by the API. Media URLs point at
    externally hosted files and are not validated.
    """

    __tablename__ = "movies"

    # id provided by StringIdMixin
    title: Mapped[str] = mapped_column(String(500))
    description: Mapped[str] = mapped_column(Text)
    video_url: Mapped[str] = mapped_column(String(2048))
    thumbnail_url: Mapped[str] = mapped_column(String(2048))
    genre: Mapped[str] = mapped_column(String(100))
    duration: Mapped[str] = mapped_column(String(50), comment="Display string, e.g. '10 minutes'")

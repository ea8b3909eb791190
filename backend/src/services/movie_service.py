"""Service layer for movie catalog reads."""
import random
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.movie import Movie
from schemas.movie import MovieCreate


async def list_movies(db: AsyncSession) -> list[Movie]:
    """Return the whole catalog, unfiltered and unpaginated."""
    result = await db.execute(select(Movie))
    return list(result.scalars().all())


async def get_movie(db: AsyncSession, movie_id: str) -> Movie | None:
    """Get a single movie by id, or None if it does not exist."""
    return await db.get(Movie, movie_id)


async def count_movies(db: AsyncSession) -> int:
    """Count the movies in the catalog."""
    result = await db.execute(select(func.count()).select_from(Movie))
    return result.scalar_one()


async def get_movie_at_offset(db: AsyncSession, offset: int) -> Movie | None:
    """Skip `offset` rows and return the next movie, or None past the end."""
    result = await db.execute(select(Movie).offset(offset).limit(1))
    return result.scalars().first()


async def get_random_movie(
    db: AsyncSession,
    rng: random.Random | None = None,
) -> Movie | None:
    """
    Pick a movie uniformly at random.

    Counts the catalog, draws an index in [0, count) and fetches the row at that
    offset. Returns None when the catalog is empty.

    Note:
        Rows are read without an ORDER BY, so the offset is relative to whatever
        order the database returns. That is fine for a uniform pick.
    """
    count = await count_movies(db)
    if count == 0:
        return None
    index = (rng or random).randrange(count)
    return await get_movie_at_offset(db, index)


async def get_movies_by_ids(db: AsyncSession, movie_ids: Sequence[str]) -> list[Movie]:
    """
    Return the movies whose id is in `movie_ids`.

    Ids that don't match a movie are ignored and duplicates collapse. Result
    order is not tied to the order of `movie_ids`.
    """
    if not movie_ids:
        return []
    result = await db.execute(select(Movie).where(Movie.id.in_(set(movie_ids))))
    return list(result.scalars().all())


async def create_movie(db: AsyncSession, data: MovieCreate) -> Movie:
    """
    Add a movie to the catalog.

    Note:
        Does not commit. Caller (session generator or script) handles commit.
    """
    movie = Movie(**data.model_dump())
    db.add(movie)
    await db.flush()
    return movie

"""Movie catalog endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.movie import MovieResponse
from services import movie_service

router = APIRouter(tags=["movies"])


@router.get("/movies", response_model=list[MovieResponse])
async def list_movies(
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    db: AsyncSession = Depends(get_async_session),
) -> list[MovieResponse]:
    """List the whole catalog."""
    movies = await movie_service.list_movies(db)
    return [MovieResponse.model_validate(m) for m in movies]


@router.get("/movies/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: str,
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    db: AsyncSession = Depends(get_async_session),
) -> MovieResponse:
    """
    Get a single movie.

    A blank id and an unknown id both return 400 "Invalid ID".
    """
    if not movie_id.strip():
        raise HTTPException(status_code=400, detail="Invalid ID")
    movie = await movie_service.get_movie(db, movie_id)
    if movie is None:
        raise HTTPException(status_code=400, detail="Invalid ID")
    return MovieResponse.model_validate(movie)


@router.get("/random", response_model=MovieResponse | None)
async def get_random_movie(
    current_user: User = Depends(get_current_user),  # noqa: ARG001
    db: AsyncSession = Depends(get_async_session),
) -> MovieResponse | None:
    """Pick a featured movie at random. Returns null when the catalog is empty."""
    movie = await movie_service.get_random_movie(db)
    if movie is None:
        return None
    return MovieResponse.model_validate(movie)

"""Favorites endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.movie import MovieResponse
from schemas.user import FavoriteRequest, UserResponse
from services import movie_service, user_service
from services.exceptions import MovieNotFoundError

router = APIRouter(tags=["favorites"])


@router.get("/favorites", response_model=list[MovieResponse])
async def list_favorites(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[MovieResponse]:
    """List the movies in the current user's favorites (order not guaranteed)."""
    movies = await movie_service.get_movies_by_ids(db, current_user.favorite_ids)
    return [MovieResponse.model_validate(m) for m in movies]


@router.post("/favorite", response_model=UserResponse)
async def add_favorite(
    data: FavoriteRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Add a movie to the current user's favorites and return the updated user."""
    try:
        user = await user_service.add_favorite(db, current_user, data.movie_id)
    except MovieNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return UserResponse.model_validate(user)


@router.delete("/favorite", response_model=UserResponse)
async def remove_favorite(
    data: FavoriteRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Remove a movie from the current user's favorites and return the updated user."""
    try:
        user = await user_service.remove_favorite(db, current_user, data.movie_id)
    except MovieNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return UserResponse.model_validate(user)

"""Public health endpoint reporting database reachability and catalog size."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from schemas.base import CamelModel
from services import movie_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(CamelModel):
    """
    Health check response.

    `movie_count` is None when the database could not be queried. A reachable
    database with an empty catalog reports "degraded".
    """

    status: str
    database: str
    movie_count: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_async_session)) -> HealthResponse:
    """Count the catalog; no session required."""
    try:
        movie_count = await movie_service.count_movies(db)
    except SQLAlchemyError:
        logger.exception("Catalog count failed during health check")
        return HealthResponse(status="unhealthy", database="unreachable")

    return HealthResponse(
        status="healthy" if movie_count > 0 else "degraded",
        database="reachable",
        movie_count=movie_count,
    )

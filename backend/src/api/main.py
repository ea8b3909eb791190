"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, favorites, health, movies, users
from core.config import get_settings
from db.session import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    yield
    # Shutdown: release pooled database connections
    await dispose_engine()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Movies API",
    description="Movie catalog, featured picks and per-user favorites for a streaming app.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(
    request: Request, exc: StarletteHTTPException,
) -> Response:
    """Return 405 with an empty body; defer everything else to FastAPI."""
    if exc.status_code == 405:
        return Response(status_code=405, headers=exc.headers)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request, exc: SQLAlchemyError,
) -> JSONResponse:
    """Collapse unexpected database failures into a generic 400."""
    logger.error(
        "Database error handling %s %s", request.method, request.url.path, exc_info=exc,
    )
    return JSONResponse(status_code=400, content={"detail": "Something went wrong"})


@app.exception_handler(Exception)
async def unexpected_exception_handler(
    request: Request, exc: Exception,
) -> JSONResponse:
    """Collapse any other unhandled failure into the same generic 400."""
    logger.error(
        "Unhandled error handling %s %s", request.method, request.url.path, exc_info=exc,
    )
    return JSONResponse(status_code=400, content={"detail": "Something went wrong"})


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(movies.router)
app.include_router(favorites.router)

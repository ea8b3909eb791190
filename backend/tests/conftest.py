"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Callable, Coroutine
from typing import Any

# Must be set before any app imports that trigger Settings validation
TEST_DATABASE_URL = "sqlite+aiosqlite://"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.auth import create_session_token  # noqa: E402
from core.config import Settings  # noqa: E402
from models.base import Base  # noqa: E402
from models.movie import Movie  # noqa: E402
from models.user import User  # noqa: E402
from schemas.user import UserRegister  # noqa: E402
from services import user_service  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_settings() -> Settings:
    """Settings used by the app under test (fast bcrypt, fixed secret)."""
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        SESSION_SECRET="test-session-secret",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an in-memory SQLite engine with a fresh schema.

    StaticPool keeps the single connection alive so every session in the test
    sees the same in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the test database, shared with the app under test."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    db_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create an unauthenticated test client with database session and settings overrides."""
    from api.main import app
    from core.config import get_settings
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    def override_get_settings() -> Settings:
        return test_settings

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = override_get_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(
    db_session: AsyncSession,
) -> Callable[..., Coroutine[Any, Any, User]]:
    """Factory that registers a credentials user."""

    async def _make_user(
        email: str = "viewer@example.com",
        name: str = "Viewer",
        password: str = TEST_PASSWORD,
    ) -> User:
        return await user_service.register_user(
            db_session,
            UserRegister(email=email, name=name, password=password),
            bcrypt_rounds=4,
        )

    return _make_user


@pytest.fixture
async def user(make_user: Callable[..., Coroutine[Any, Any, User]]) -> User:
    """A registered user."""
    return await make_user()


@pytest.fixture
def make_movie(db_session: AsyncSession) -> Callable[..., Coroutine[Any, Any, Movie]]:
    """Factory that adds a movie to the catalog."""

    async def _make_movie(title: str = "Big Buck Bunny", **overrides: str) -> Movie:
        movie = Movie(
            title=title,
            description=overrides.get("description", f"{title} description"),
            video_url=overrides.get("video_url", "https://videos.example.com/movie.mp4"),
            thumbnail_url=overrides.get("thumbnail_url", "https://images.example.com/thumb.jpg"),
            genre=overrides.get("genre", "Comedy"),
            duration=overrides.get("duration", "10 minutes"),
        )
        db_session.add(movie)
        await db_session.flush()
        return movie

    return _make_movie


@pytest.fixture
def session_token(user: User, test_settings: Settings) -> str:
    """A valid session token for `user`."""
    return create_session_token(user, test_settings)


@pytest.fixture
def auth_headers(session_token: str) -> dict[str, str]:
    """Authorization header carrying the session token for `user`."""
    return {"Authorization": f"Bearer {session_token}"}

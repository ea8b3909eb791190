"""Service layer for user accounts, credentials and favorites."""
import asyncio
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utc_now
from models.user import User
from schemas.user import UserRegister
from services import movie_service
from services.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    MovieNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash has an unexpected format")
        return False


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email, or None."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    """Get a user by id, or None."""
    return await db.get(User, user_id)


async def register_user(
    db: AsyncSession,
    data: UserRegister,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Create a credentials account.

    The email is marked verified immediately and the profile image is left empty.
    Hashing runs in a worker thread since bcrypt is deliberately slow.

    Raises:
        EmailTakenError: If a user with this email already exists.

    Note:
        Uses flush(), not commit. Session generator handles commit at request end.
    """
    if await get_user_by_email(db, data.email) is not None:
        raise EmailTakenError(data.email) from None

    hashed = await asyncio.to_thread(hash_password, data.password, bcrypt_rounds)
    user = User(
        email=data.email,
        name=data.name,
        hashed_password=hashed,
        image="",
        email_verified=utc_now(),
        favorite_ids=[],
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Another request registered the same email between our SELECT and INSERT.
        # Registration does no other work in the request, so rolling back is safe.
        await db.rollback()
        raise EmailTakenError(data.email) from None

    logger.info("Registered user id=%s", user.id)
    return user


async def authenticate(
    db: AsyncSession,
    email: str | None,
    password: str | None,
) -> User:
    """
    Validate email/password credentials and return the user.

    Raises:
        InvalidCredentialsError: With a message describing which check failed.
    """
    if not email or not password:
        raise InvalidCredentialsError("Email and password required")

    user = await get_user_by_email(db, email)
    # OAuth-only accounts have no password hash and can't use this path
    if user is None or not user.hashed_password:
        raise InvalidCredentialsError("Email does not exist")

    is_correct = await asyncio.to_thread(verify_password, password, user.hashed_password)
    if not is_correct:
        raise InvalidCredentialsError("Incorrect password")

    return user


async def _ensure_movie_exists(db: AsyncSession, movie_id: str) -> None:
    if await movie_service.get_movie(db, movie_id) is None:
        raise MovieNotFoundError(movie_id)


async def add_favorite(db: AsyncSession, user: User, movie_id: str) -> User:
    """
    Append a movie id to the user's favorites.

    Not deduplicated: adding the same movie twice stores it twice, and a single
    remove_favorite() call drops every copy.

    Raises:
        MovieNotFoundError: If the movie does not exist.
    """
    await _ensure_movie_exists(db, movie_id)
    user.favorite_ids = [*user.favorite_ids, movie_id]
    await db.flush()
    return user


async def remove_favorite(db: AsyncSession, user: User, movie_id: str) -> User:
    """
    Remove every occurrence of a movie id from the user's favorites.

    Raises:
        MovieNotFoundError: If the movie does not exist.
    """
    await _ensure_movie_exists(db, movie_id)
    user.favorite_ids = [fid for fid in user.favorite_ids if fid != movie_id]
    await db.flush()
    return user

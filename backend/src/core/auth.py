"""
Session tokens and the current-user dependency.

A session is an HS256-signed JWT whose `email` claim identifies the user. It is
read from the session cookie or an `Authorization: Bearer` header; a cookie that
fails to decode falls back to the header.
Every protected request re-validates the token and re-reads the user row; there
is no caching between requests.
"""
import logging
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from services import user_service

logger = logging.getLogger(__name__)

SESSION_ALGORITHM = "HS256"

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def _not_signed_in() -> HTTPException:
    # No session and a session for a deleted account look the same to the client
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not signed in",
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_session_token(user: User, settings: Settings) -> str:
    """Issue a signed session token for a user."""
    now = datetime.now(UTC)
    payload = {
        "sub": user.id,
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(seconds=settings.session_max_age_seconds),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=SESSION_ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> dict | None:
    """
    Decode and validate a session token.

    Returns:
        The token claims, or None if the token is expired, tampered with or malformed.
    """
    try:
        return jwt.decode(
            token,
            settings.session_secret,
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["exp", "email"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Session token expired")
        return None
    except jwt.PyJWTError as e:
        logger.warning("Session token validation failed: %s", e)
        return None


def extract_session_tokens(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> list[str]:
    """Return the raw session tokens carried by the request, cookie first, then Bearer."""
    tokens = []
    cookie_token = request.cookies.get(settings.session_cookie_name)
    if cookie_token:
        tokens.append(cookie_token)
    if credentials is not None and credentials.credentials:
        tokens.append(credentials.credentials)
    return tokens


def get_session_email(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    """
    Resolve the email claim of the request's session without touching the database.

    The cookie is tried first. If it is expired or invalid, a Bearer token on the
    same request is used instead.
    """
    for token in extract_session_tokens(request, credentials, settings):
        claims = decode_session_token(token, settings)
        if claims is None:
            continue
        email = claims.get("email")
        if isinstance(email, str) and email:
            return email
    return None


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the session and returns the current user.

    Raises 401 "Not signed in" when there is no valid session or when the
    session's email no longer belongs to a user.
    """
    email = get_session_email(request, credentials, settings)
    if email is None:
        raise _not_signed_in()

    user = await user_service.get_user_by_email(db, email)
    if user is None:
        logger.info("Session references a missing account")
        raise _not_signed_in()

    return user

"""Credentials sign-in, sign-out and session status endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.auth import create_session_token, get_session_email, security
from core.config import Settings
from schemas.auth import LoginRequest, LoginResponse, SessionStatus
from schemas.user import UserResponse
from services import user_service
from services.exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """
    Sign in with email and password.

    Sets an HttpOnly session cookie and also returns the token for clients
    that prefer the Authorization header.
    """
    try:
        user = await user_service.authenticate(db, data.email, data.password)
    except InvalidCredentialsError as e:
        logger.info("Credentials sign-in rejected: %s", e)
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    token = create_session_token(user, settings)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/logout", status_code=204)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> None:
    """Clear the session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.get("/session", response_model=SessionStatus)
async def get_session_status(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> SessionStatus:
    """
    Report whether the request carries a valid session.

    Only checks the token signature and expiry; it does not confirm the account
    still exists. Use /current for that.
    """
    email = get_session_email(request, credentials, settings)
    return SessionStatus(authenticated=email is not None, email=email)

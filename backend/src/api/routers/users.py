"""Current-user and registration endpoints."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_settings
from core.config import Settings
from models.user import User
from schemas.user import UserRegister, UserResponse
from services import user_service
from services.exceptions import EmailTakenError

router = APIRouter(tags=["users"])


@router.get("/current", response_model=UserResponse)
async def get_current(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Get the signed-in user's record."""
    return UserResponse.model_validate(current_user)


@router.post(
    "/register",
    response_model=UserResponse,
    responses={422: {"description": "Email already registered"}},
)
async def register(
    data: UserRegister,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> UserResponse | JSONResponse:
    """
    Create a credentials account. No session required.

    Returns 422 `{"error": "Email taken"}` if the email is already registered.
    """
    try:
        user = await user_service.register_user(db, data, settings.bcrypt_rounds)
    except EmailTakenError as e:
        return JSONResponse(status_code=422, content={"error": str(e)})
    return UserResponse.model_validate(user)

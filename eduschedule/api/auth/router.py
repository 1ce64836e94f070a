from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.schemas import CurrentUser, CurrentUserResponse, LoginRequest, LoginResponse
from eduschedule.auth.services import get_user_info, login_user
from eduschedule.core.exceptions import ServiceError
from eduschedule.core.schemas import SuccessResponse
from eduschedule.db.session import get_db

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    try:
        return await login_user(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.post("/login-oauth")
async def login_oauth(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Form-encoded login for the interactive docs' Authorize button."""
    payload = LoginRequest(
        email=form_data.username.strip(),
        password=form_data.password,
    )
    try:
        result = await login_user(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    return {
        "access_token": result.access_token,
        "token_type": "bearer",
    }


@router.post("/logout", response_model=SuccessResponse)
async def logout(current_user: CurrentUser = Depends(get_current_user)) -> SuccessResponse:
    # Tokens are stateless; the client drops its copy
    return SuccessResponse()


@router.get("/me", response_model=CurrentUserResponse)
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUserResponse:
    try:
        return CurrentUserResponse(user=await get_user_info(db, current_user.id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)

import logging

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.models import User
from eduschedule.auth.schemas import LoginRequest, LoginResponse, UserInfo
from eduschedule.auth.security import create_access_token, verify_password
from eduschedule.core.exceptions import ServiceError

logger = logging.getLogger(__name__)


async def login_user(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    # Email match is case-insensitive
    result = await db.execute(select(User).where(func.lower(User.email) == func.lower(payload.email)))
    user = result.scalar_one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Rejected login for %s", payload.email)
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    token = create_access_token(user.id, user.role)
    return LoginResponse(access_token=token, user=UserInfo.model_validate(user))


async def get_user_info(db: AsyncSession, user_id: int) -> UserInfo:
    user = await db.get(User, user_id)
    if not user:
        raise ServiceError("Unauthorized", status.HTTP_401_UNAUTHORIZED)
    return UserInfo.model_validate(user)

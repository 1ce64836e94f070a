import logging
from typing import List, Optional

from fastapi import status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.models import User
from eduschedule.auth.security import hash_password
from eduschedule.core.enums import UserRole
from eduschedule.core.exceptions import ServiceError

from .schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)


def _to_response(u: User) -> UserResponse:
    return UserResponse.model_validate(u)


def default_username(first_name: str, last_name: str) -> str:
    return f"{first_name.strip().lower()}.{last_name.strip().lower()}".replace(" ", "")


async def create_user(db: AsyncSession, payload: UserCreate) -> UserResponse:
    username = (payload.username or default_username(payload.first_name, payload.last_name)).strip()
    email = str(payload.email).strip()
    existing = await db.execute(
        select(User.id).where(
            or_(
                func.lower(User.email) == email.lower(),
                func.lower(User.username) == username.lower(),
            )
        ).limit(1)
    )
    if existing.scalar_one_or_none() is not None:
        raise ServiceError("Email or username is already in use", status.HTTP_409_CONFLICT)
    obj = User(
        username=username,
        email=email,
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        password_hash=hash_password(payload.password),
        role=payload.role.value,
        subjects=payload.subjects,
    )
    try:
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        raise ServiceError("Email or username is already in use", status.HTTP_409_CONFLICT) from e
    logger.info("Created %s account %s", obj.role, obj.email)
    return _to_response(obj)


async def list_users(db: AsyncSession) -> List[UserResponse]:
    result = await db.execute(select(User).order_by(User.last_name, User.first_name, User.id))
    return [_to_response(u) for u in result.scalars().all()]


async def list_teachers(db: AsyncSession) -> List[UserResponse]:
    result = await db.execute(
        select(User).where(User.role == UserRole.TEACHER.value).order_by(User.last_name, User.first_name, User.id)
    )
    return [_to_response(u) for u in result.scalars().all()]


async def get_user(db: AsyncSession, user_id: int) -> Optional[UserResponse]:
    obj = await db.get(User, user_id)
    return _to_response(obj) if obj else None

from typing import List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.api.class_sessions import service as class_sessions_service
from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import Homework

from .schemas import HomeworkCreate, HomeworkResponse, HomeworkUpdate


def _to_response(h: Homework) -> HomeworkResponse:
    return HomeworkResponse(
        id=h.id,
        class_session_id=h.class_session_id,
        title=h.title,
        description=h.description,
        due_date=h.due_date,
    )


async def create_homework(db: AsyncSession, payload: HomeworkCreate) -> HomeworkResponse:
    if not await class_sessions_service.class_session_exists(db, payload.class_session_id):
        raise ServiceError("Invalid class session", status.HTTP_400_BAD_REQUEST)
    obj = Homework(
        class_session_id=payload.class_session_id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)


async def list_homework_by_class_session(db: AsyncSession, class_session_id: int) -> List[HomeworkResponse]:
    result = await db.execute(
        select(Homework)
        .where(Homework.class_session_id == class_session_id)
        .order_by(Homework.due_date, Homework.id)
    )
    return [_to_response(h) for h in result.scalars().all()]


async def update_homework(
    db: AsyncSession,
    homework_id: int,
    payload: HomeworkUpdate,
) -> Optional[HomeworkResponse]:
    obj = await db.get(Homework, homework_id)
    if not obj:
        return None
    if payload.title is not None:
        obj.title = payload.title
    if payload.description is not None:
        obj.description = payload.description
    if payload.due_date is not None:
        obj.due_date = payload.due_date
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)

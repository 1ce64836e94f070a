"""Class sessions: one per timetable entry per calendar date.

A session starts empty when a teacher first opens the class for a date and
is then annotated with notes and a lesson plan any number of times.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.api.timetable import service as timetable_service
from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import ClassSession

from .schemas import ClassSessionCreate, ClassSessionResponse, ClassSessionUpdate

logger = logging.getLogger(__name__)


def _to_response(s: ClassSession) -> ClassSessionResponse:
    return ClassSessionResponse(
        id=s.id,
        timetable_entry_id=s.timetable_entry_id,
        date=s.date,
        notes=s.notes,
        lesson_plan=s.lesson_plan,
    )


async def _find(db: AsyncSession, timetable_entry_id: int, on_date: date) -> Optional[ClassSession]:
    result = await db.execute(
        select(ClassSession).where(
            ClassSession.timetable_entry_id == timetable_entry_id,
            ClassSession.date == on_date,
        )
    )
    return result.scalar_one_or_none()


async def create_class_session(db: AsyncSession, payload: ClassSessionCreate) -> ClassSessionResponse:
    await timetable_service.get_timetable_entry_model(db, payload.timetable_entry_id)
    if await _find(db, payload.timetable_entry_id, payload.date):
        raise ServiceError(
            "A class session already exists for this timetable entry and date",
            status.HTTP_409_CONFLICT,
        )
    obj = ClassSession(
        timetable_entry_id=payload.timetable_entry_id,
        date=payload.date,
        notes=payload.notes,
        lesson_plan=payload.lesson_plan,
    )
    try:
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ServiceError(
            "A class session already exists for this timetable entry and date",
            status.HTTP_409_CONFLICT,
        )
    return _to_response(obj)


async def ensure_class_session(
    db: AsyncSession,
    timetable_entry_id: int,
    on_date: date,
) -> ClassSessionResponse:
    """Return the session for (entry, date), creating an empty one on first access."""
    existing = await _find(db, timetable_entry_id, on_date)
    if existing:
        return _to_response(existing)
    await timetable_service.get_timetable_entry_model(db, timetable_entry_id)
    obj = ClassSession(timetable_entry_id=timetable_entry_id, date=on_date)
    try:
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        # Another request created it first; use theirs
        await db.rollback()
        existing = await _find(db, timetable_entry_id, on_date)
        if not existing:
            raise
        return _to_response(existing)
    logger.info("Opened class session %s for timetable entry %s on %s", obj.id, timetable_entry_id, on_date)
    return _to_response(obj)


async def get_class_session(db: AsyncSession, session_id: int) -> Optional[ClassSessionResponse]:
    obj = await db.get(ClassSession, session_id)
    return _to_response(obj) if obj else None


async def list_class_sessions(db: AsyncSession) -> List[ClassSessionResponse]:
    result = await db.execute(select(ClassSession).order_by(ClassSession.date.desc(), ClassSession.id.desc()))
    return [_to_response(s) for s in result.scalars().all()]


async def list_class_sessions_by_timetable_entry(
    db: AsyncSession,
    timetable_entry_id: int,
    on_date: Optional[date] = None,
) -> List[ClassSessionResponse]:
    """Sessions of one entry, most recent date first."""
    stmt = select(ClassSession).where(ClassSession.timetable_entry_id == timetable_entry_id)
    if on_date is not None:
        stmt = stmt.where(ClassSession.date == on_date)
    stmt = stmt.order_by(ClassSession.date.desc(), ClassSession.id.desc())
    result = await db.execute(stmt)
    return [_to_response(s) for s in result.scalars().all()]


async def update_class_session(
    db: AsyncSession,
    session_id: int,
    payload: ClassSessionUpdate,
) -> Optional[ClassSessionResponse]:
    obj = await db.get(ClassSession, session_id)
    if not obj:
        return None
    changes = payload.model_dump(exclude_unset=True)
    if "notes" in changes:
        obj.notes = changes["notes"]
    if "lesson_plan" in changes:
        obj.lesson_plan = changes["lesson_plan"]
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)


async def class_session_exists(db: AsyncSession, session_id: int) -> bool:
    return await db.get(ClassSession, session_id) is not None

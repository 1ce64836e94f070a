from typing import List, Optional

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import Subject

from .schemas import SubjectCreate, SubjectResponse, SubjectUpdate


def _to_response(s: Subject) -> SubjectResponse:
    return SubjectResponse(id=s.id, name=s.name, color=s.color)


async def _existing_by_name(
    db: AsyncSession, name: str, exclude_subject_id: Optional[int] = None
) -> Optional[Subject]:
    stmt = select(Subject).where(func.lower(Subject.name) == name.lower())
    if exclude_subject_id is not None:
        stmt = stmt.where(Subject.id != exclude_subject_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_subject(db: AsyncSession, payload: SubjectCreate) -> SubjectResponse:
    name = payload.name.strip()
    if await _existing_by_name(db, name):
        raise ServiceError(f"Subject '{name}' already exists", status.HTTP_409_CONFLICT)
    obj = Subject(name=name, color=payload.color.upper())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)


async def list_subjects(db: AsyncSession) -> List[SubjectResponse]:
    result = await db.execute(select(Subject).order_by(Subject.name))
    return [_to_response(s) for s in result.scalars().all()]


async def get_subject(db: AsyncSession, subject_id: int) -> Optional[SubjectResponse]:
    obj = await db.get(Subject, subject_id)
    return _to_response(obj) if obj else None


async def update_subject(db: AsyncSession, subject_id: int, payload: SubjectUpdate) -> Optional[SubjectResponse]:
    obj = await db.get(Subject, subject_id)
    if not obj:
        return None
    if payload.name is not None:
        name = payload.name.strip()
        if await _existing_by_name(db, name, exclude_subject_id=subject_id):
            raise ServiceError(f"Subject '{name}' already exists", status.HTTP_409_CONFLICT)
        obj.name = name
    if payload.color is not None:
        obj.color = payload.color.upper()
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)

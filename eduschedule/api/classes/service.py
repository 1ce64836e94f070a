from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.core.models import SchoolClass

from .schemas import ClassCreate, ClassResponse, ClassUpdate


def _to_response(c: SchoolClass) -> ClassResponse:
    return ClassResponse(
        id=c.id,
        name=c.name,
        grade=c.grade,
        section=c.section,
        room_number=c.room_number,
    )


async def create_class(db: AsyncSession, payload: ClassCreate) -> ClassResponse:
    obj = SchoolClass(
        name=payload.name.strip(),
        grade=payload.grade.strip(),
        section=payload.section.strip(),
        room_number=payload.room_number.strip() if payload.room_number and payload.room_number.strip() else None,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)


async def list_classes(db: AsyncSession) -> List[ClassResponse]:
    result = await db.execute(select(SchoolClass).order_by(SchoolClass.grade, SchoolClass.section, SchoolClass.name))
    return [_to_response(c) for c in result.scalars().all()]


async def get_class(db: AsyncSession, class_id: int) -> Optional[ClassResponse]:
    obj = await db.get(SchoolClass, class_id)
    return _to_response(obj) if obj else None


async def update_class(db: AsyncSession, class_id: int, payload: ClassUpdate) -> Optional[ClassResponse]:
    obj = await db.get(SchoolClass, class_id)
    if not obj:
        return None
    changes = payload.model_dump(exclude_unset=True)
    for field in ("name", "grade", "section"):
        if changes.get(field) is not None:
            setattr(obj, field, changes[field].strip())
    if "room_number" in changes:
        room = (changes["room_number"] or "").strip()
        obj.room_number = room or None
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)

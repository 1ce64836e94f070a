from typing import List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import TimeSlot

from .schemas import TimeSlotCreate, TimeSlotResponse, TimeSlotUpdate


def _to_response(t: TimeSlot) -> TimeSlotResponse:
    return TimeSlotResponse(id=t.id, start_time=t.start_time, end_time=t.end_time, label=t.label)


async def create_time_slot(db: AsyncSession, payload: TimeSlotCreate) -> TimeSlotResponse:
    obj = TimeSlot(start_time=payload.start_time, end_time=payload.end_time, label=payload.label.strip())
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)


async def list_time_slots(db: AsyncSession) -> List[TimeSlotResponse]:
    result = await db.execute(select(TimeSlot).order_by(TimeSlot.start_time, TimeSlot.id))
    return [_to_response(t) for t in result.scalars().all()]


async def get_time_slot(db: AsyncSession, time_slot_id: int) -> Optional[TimeSlotResponse]:
    obj = await db.get(TimeSlot, time_slot_id)
    return _to_response(obj) if obj else None


async def update_time_slot(
    db: AsyncSession,
    time_slot_id: int,
    payload: TimeSlotUpdate,
) -> Optional[TimeSlotResponse]:
    obj = await db.get(TimeSlot, time_slot_id)
    if not obj:
        return None
    if payload.start_time is not None:
        obj.start_time = payload.start_time
    if payload.end_time is not None:
        obj.end_time = payload.end_time
    if payload.label is not None:
        obj.label = payload.label.strip()
    if obj.end_time <= obj.start_time:
        await db.rollback()
        raise ServiceError("end_time must be after start_time", status.HTTP_400_BAD_REQUEST)
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)

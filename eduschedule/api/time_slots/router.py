from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.rbac import require_admin
from eduschedule.auth.schemas import CurrentUser
from eduschedule.core.exceptions import ServiceError
from eduschedule.db.session import get_db

from .schemas import TimeSlotCreate, TimeSlotResponse, TimeSlotUpdate
from . import service

router = APIRouter(prefix="/api/timeslots", tags=["time slots"])


@router.get("", response_model=List[TimeSlotResponse])
async def list_time_slots(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_time_slots(db)


@router.post("", response_model=TimeSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_time_slot(
    payload: TimeSlotCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    return await service.create_time_slot(db, payload)


@router.get("/{time_slot_id}", response_model=TimeSlotResponse)
async def get_time_slot(
    time_slot_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    obj = await service.get_time_slot(db, time_slot_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Time slot not found")
    return obj


@router.put("/{time_slot_id}", response_model=TimeSlotResponse)
async def update_time_slot(
    time_slot_id: int,
    payload: TimeSlotUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    try:
        obj = await service.update_time_slot(db, time_slot_id, payload)
        if not obj:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Time slot not found")
        return obj
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)

"""Attendance API router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.schemas import CurrentUser
from eduschedule.core.exceptions import ServiceError
from eduschedule.db.session import get_db

from . import service
from .schemas import (
    AttendanceBatchCreate,
    AttendanceRecordCreate,
    AttendanceRecordResponse,
    AttendanceRecordUpdate,
)

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.get("/classsession/{class_session_id}", response_model=List[AttendanceRecordResponse])
async def list_attendance_by_class_session(
    class_session_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_attendance_by_class_session(db, class_session_id)


@router.post("", response_model=AttendanceRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_attendance_record(
    payload: AttendanceRecordCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await service.create_attendance_record(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.post("/batch", response_model=List[AttendanceRecordResponse], status_code=status.HTTP_201_CREATED)
async def submit_attendance_batch(
    payload: AttendanceBatchCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Save the register for one or more sessions. All records are validated before anything is written."""
    try:
        return await service.save_attendance_records(db, payload.records)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.put("/{record_id}", response_model=AttendanceRecordResponse)
async def update_attendance_record(
    record_id: int,
    payload: AttendanceRecordUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    obj = await service.update_attendance_record(db, record_id, payload)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance record not found")
    return obj

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.api.substitutions import service as substitutions_service
from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.rbac import require_admin
from eduschedule.auth.schemas import CurrentUser
from eduschedule.core.exceptions import ServiceError
from eduschedule.core.schemas import SuccessResponse
from eduschedule.db.session import get_db

from .schemas import (
    ConflictCheckResponse,
    EffectiveTeacherResponse,
    TimetableEntryCreate,
    TimetableEntryResponse,
    TimetableEntryUpdate,
)
from . import service

router = APIRouter(prefix="/api/timetable", tags=["timetable"])


@router.get("", response_model=List[TimetableEntryResponse])
async def list_timetable_entries(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_timetable_entries(db)


@router.get("/teacher/{teacher_id}", response_model=List[TimetableEntryResponse])
async def list_timetable_entries_by_teacher(
    teacher_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_timetable_entries_by_teacher(db, teacher_id)


@router.get("/day/{day}", response_model=List[TimetableEntryResponse])
async def list_timetable_entries_by_day(
    day: int = Path(..., ge=1, le=7, description="1=Monday .. 7=Sunday"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_timetable_entries_by_day(db, day)


@router.post("/conflicts", response_model=ConflictCheckResponse)
async def check_timetable_conflicts(
    payload: TimetableEntryCreate,
    exclude_id: Optional[int] = Query(None, alias="excludeId", description="Entry being edited"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Report teacher/class/room clashes for a proposed entry without saving it."""
    conflicts = await service.check_timetable_conflicts(db, payload.root, exclude_id=exclude_id)
    return ConflictCheckResponse(conflicts=conflicts)


@router.post(
    "",
    response_model=TimetableEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_timetable_entry(
    payload: TimetableEntryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    try:
        return await service.create_timetable_entry(db, payload.root)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.get("/{entry_id}", response_model=TimetableEntryResponse)
async def get_timetable_entry(
    entry_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    obj = await service.get_timetable_entry(db, entry_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timetable entry not found")
    return obj


@router.get("/{entry_id}/teacher", response_model=EffectiveTeacherResponse)
async def get_effective_teacher(
    entry_id: int,
    on_date: Optional[date] = Query(None, alias="date", description="Defaults to today"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Who actually teaches this entry on a date, once substitutions are applied."""
    try:
        return await substitutions_service.resolve_effective_teacher(db, entry_id, on_date or date.today())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.put("/{entry_id}", response_model=TimetableEntryResponse)
async def update_timetable_entry(
    entry_id: int,
    payload: TimetableEntryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    try:
        obj = await service.update_timetable_entry(db, entry_id, payload)
        if not obj:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timetable entry not found")
        return obj
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def delete_timetable_entry(
    entry_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    deleted = await service.delete_timetable_entry(db, entry_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timetable entry not found")
    return SuccessResponse()

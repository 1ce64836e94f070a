from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.schemas import CurrentUser
from eduschedule.core.exceptions import ServiceError
from eduschedule.db.session import get_db

from .schemas import ClassSessionCreate, ClassSessionResponse, ClassSessionUpdate
from . import service

router = APIRouter(prefix="/api/classsessions", tags=["class sessions"])


@router.get("", response_model=List[ClassSessionResponse])
async def list_class_sessions(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_class_sessions(db)


@router.post("", response_model=ClassSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_class_session(
    payload: ClassSessionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await service.create_class_session(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.get("/timetable/{timetable_entry_id}", response_model=List[ClassSessionResponse])
async def list_class_sessions_by_timetable_entry(
    timetable_entry_id: int,
    on_date: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_class_sessions_by_timetable_entry(db, timetable_entry_id, on_date=on_date)


@router.post("/timetable/{timetable_entry_id}/ensure", response_model=ClassSessionResponse)
async def ensure_class_session(
    timetable_entry_id: int,
    on_date: Optional[date] = Query(None, alias="date", description="Defaults to today"),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Get the session for this entry and date, creating an empty one if absent."""
    try:
        return await service.ensure_class_session(db, timetable_entry_id, on_date or date.today())
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.get("/{session_id}", response_model=ClassSessionResponse)
async def get_class_session(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    obj = await service.get_class_session(db, session_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class session not found")
    return obj


@router.put("/{session_id}", response_model=ClassSessionResponse)
async def update_class_session(
    session_id: int,
    payload: ClassSessionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    obj = await service.update_class_session(db, session_id, payload)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class session not found")
    return obj

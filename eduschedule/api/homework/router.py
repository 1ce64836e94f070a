from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.schemas import CurrentUser
from eduschedule.core.exceptions import ServiceError
from eduschedule.db.session import get_db

from .schemas import HomeworkCreate, HomeworkResponse, HomeworkUpdate
from . import service

router = APIRouter(prefix="/api/homework", tags=["homework"])


@router.get("/classsession/{class_session_id}", response_model=List[HomeworkResponse])
async def list_homework_by_class_session(
    class_session_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_homework_by_class_session(db, class_session_id)


@router.post("", response_model=HomeworkResponse, status_code=status.HTTP_201_CREATED)
async def create_homework(
    payload: HomeworkCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await service.create_homework(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.put("/{homework_id}", response_model=HomeworkResponse)
async def update_homework(
    homework_id: int,
    payload: HomeworkUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    obj = await service.update_homework(db, homework_id, payload)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Homework not found")
    return obj

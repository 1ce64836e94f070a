from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.dependencies import get_current_user
from eduschedule.auth.rbac import require_admin
from eduschedule.auth.schemas import CurrentUser
from eduschedule.core.exceptions import ServiceError
from eduschedule.db.session import get_db

from .schemas import (
    SubstitutionClashReport,
    SubstitutionCreate,
    SubstitutionResponse,
    TeacherSubstitutionResponse,
)
from . import service

router = APIRouter(prefix="/api/substitutions", tags=["substitutions"])


@router.get("", response_model=List[SubstitutionResponse])
async def list_substitutions(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_substitutions(db)


@router.get("/teacher/{teacher_id}", response_model=List[TeacherSubstitutionResponse])
async def list_substitutions_by_teacher(
    teacher_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await service.list_substitutions_by_teacher(db, teacher_id)


@router.get("/{substitution_id}/clashes", response_model=SubstitutionClashReport)
async def get_substitution_clashes(
    substitution_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        return await service.get_substitution_clashes(db, substitution_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.post("", response_model=SubstitutionResponse, status_code=status.HTTP_201_CREATED)
async def create_substitution(
    payload: SubstitutionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin),
):
    try:
        return await service.create_substitution(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)

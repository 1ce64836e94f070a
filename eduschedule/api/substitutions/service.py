"""Substitutions overlay the timetable for a date range without editing it.

Who teaches an entry on a given date is resolved at read time from the
entry's teacher and the substitutions covering that date.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.api.timetable import service as timetable_service
from eduschedule.api.timetable.conflicts import detect_substitute_clashes, weekdays_in_range
from eduschedule.api.timetable.schemas import EffectiveTeacherResponse
from eduschedule.auth.models import User
from eduschedule.core.enums import SubstitutionRole
from eduschedule.core.exceptions import NotFoundError, ServiceError
from eduschedule.core.models import Substitution, TimetableEntry

from .schemas import (
    SubstitutionClashReport,
    SubstitutionCreate,
    SubstitutionResponse,
    TeacherSubstitutionResponse,
)

logger = logging.getLogger(__name__)


def _to_response(s: Substitution) -> SubstitutionResponse:
    return SubstitutionResponse(
        id=s.id,
        original_teacher_id=s.original_teacher_id,
        substitute_teacher_id=s.substitute_teacher_id,
        start_date=s.start_date,
        end_date=s.end_date,
        reason=s.reason,
    )


async def create_substitution(db: AsyncSession, payload: SubstitutionCreate) -> SubstitutionResponse:
    # Date order and self-substitution are rejected by SubstitutionCreate itself
    for teacher_id in (payload.original_teacher_id, payload.substitute_teacher_id):
        if not await db.get(User, teacher_id):
            raise ServiceError(f"Invalid teacher {teacher_id}", status.HTTP_400_BAD_REQUEST)
    obj = Substitution(
        original_teacher_id=payload.original_teacher_id,
        substitute_teacher_id=payload.substitute_teacher_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        reason=payload.reason.strip() if payload.reason and payload.reason.strip() else None,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info(
        "Teacher %s substitutes for teacher %s from %s to %s",
        obj.substitute_teacher_id,
        obj.original_teacher_id,
        obj.start_date,
        obj.end_date,
    )
    return _to_response(obj)


async def list_substitutions(db: AsyncSession) -> List[SubstitutionResponse]:
    result = await db.execute(select(Substitution).order_by(Substitution.start_date.desc(), Substitution.id.desc()))
    return [_to_response(s) for s in result.scalars().all()]


async def list_substitutions_by_teacher(db: AsyncSession, teacher_id: int) -> List[TeacherSubstitutionResponse]:
    """Substitutions where the teacher is either the one replaced or the one covering."""
    result = await db.execute(
        select(Substitution)
        .where(
            or_(
                Substitution.original_teacher_id == teacher_id,
                Substitution.substitute_teacher_id == teacher_id,
            )
        )
        .order_by(Substitution.start_date.desc(), Substitution.id.desc())
    )
    out: List[TeacherSubstitutionResponse] = []
    for s in result.scalars().all():
        role = SubstitutionRole.ABSENT if s.original_teacher_id == teacher_id else SubstitutionRole.SUBSTITUTE
        out.append(TeacherSubstitutionResponse(**_to_response(s).model_dump(), role=role))
    return out


async def get_substitution_clashes(db: AsyncSession, substitution_id: int) -> SubstitutionClashReport:
    """Slots the substitute must cover while already teaching elsewhere. Advisory only."""
    sub = await db.get(Substitution, substitution_id)
    if not sub:
        raise NotFoundError("Substitution")
    original = await db.execute(select(TimetableEntry).where(TimetableEntry.teacher_id == sub.original_teacher_id))
    substitute = await db.execute(select(TimetableEntry).where(TimetableEntry.teacher_id == sub.substitute_teacher_id))
    clashes = detect_substitute_clashes(
        original.scalars().all(),
        substitute.scalars().all(),
        weekdays_in_range(sub.start_date, sub.end_date),
    )
    return SubstitutionClashReport(substitution_id=sub.id, clashes=clashes)


async def _covering_substitution(db: AsyncSession, teacher_id: int, on_date: date) -> Optional[Substitution]:
    result = await db.execute(
        select(Substitution)
        .where(
            Substitution.original_teacher_id == teacher_id,
            Substitution.start_date <= on_date,
            Substitution.end_date >= on_date,
        )
        # Most recently recorded wins when ranges overlap
        .order_by(Substitution.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def resolve_effective_teacher(
    db: AsyncSession,
    timetable_entry_id: int,
    on_date: date,
) -> EffectiveTeacherResponse:
    entry = await timetable_service.get_timetable_entry_model(db, timetable_entry_id)
    sub = await _covering_substitution(db, entry.teacher_id, on_date)
    return EffectiveTeacherResponse(
        timetable_entry_id=entry.id,
        date=on_date,
        teacher_id=sub.substitute_teacher_id if sub else entry.teacher_id,
        original_teacher_id=entry.teacher_id,
        substitution_id=sub.id if sub else None,
    )

"""School-wide settings, stored as a single row created on first read."""

from datetime import date, timedelta

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import SchoolSettings
from eduschedule.core.models.school_settings import DEFAULT_SCHOOL_NAME

from .schemas import SettingsResponse, SettingsUpdate

DEFAULT_SEMESTER_DAYS = 120


def _to_response(s: SchoolSettings) -> SettingsResponse:
    return SettingsResponse(
        id=s.id,
        semester_start_date=s.semester_start_date,
        semester_end_date=s.semester_end_date,
        school_name=s.school_name,
    )


async def _get_or_create(db: AsyncSession) -> SchoolSettings:
    result = await db.execute(select(SchoolSettings).order_by(SchoolSettings.id).limit(1))
    obj = result.scalar_one_or_none()
    if obj:
        return obj
    today = date.today()
    obj = SchoolSettings(
        semester_start_date=today,
        semester_end_date=today + timedelta(days=DEFAULT_SEMESTER_DAYS),
        school_name=DEFAULT_SCHOOL_NAME,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def get_settings(db: AsyncSession) -> SettingsResponse:
    return _to_response(await _get_or_create(db))


async def update_settings(db: AsyncSession, payload: SettingsUpdate) -> SettingsResponse:
    obj = await _get_or_create(db)
    start = payload.semester_start_date or obj.semester_start_date
    end = payload.semester_end_date or obj.semester_end_date
    if end < start:
        raise ServiceError("Semester end date must be on or after start date", status.HTTP_400_BAD_REQUEST)
    obj.semester_start_date = start
    obj.semester_end_date = end
    if payload.school_name is not None:
        obj.school_name = payload.school_name.strip()
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)

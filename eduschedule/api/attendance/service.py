"""Per-session attendance. Saving is an upsert on (class session, student),
so re-saving the register updates rows instead of duplicating them."""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.api.class_sessions import service as class_sessions_service
from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import AttendanceRecord, Student

from .schemas import AttendanceRecordCreate, AttendanceRecordResponse, AttendanceRecordUpdate


def _to_response(r: AttendanceRecord) -> AttendanceRecordResponse:
    return AttendanceRecordResponse(
        id=r.id,
        class_session_id=r.class_session_id,
        student_id=r.student_id,
        status=r.status,
        timestamp=r.timestamp,
    )


async def _validate_references(db: AsyncSession, records: List[AttendanceRecordCreate]) -> None:
    for session_id in sorted({r.class_session_id for r in records}):
        if not await class_sessions_service.class_session_exists(db, session_id):
            raise ServiceError(f"Invalid class session {session_id}", status.HTTP_400_BAD_REQUEST)
    student_ids = {r.student_id for r in records}
    result = await db.execute(select(Student.id).where(Student.id.in_(student_ids)))
    missing = student_ids - set(result.scalars().all())
    if missing:
        raise ServiceError(
            "Invalid student id(s): " + ", ".join(str(i) for i in sorted(missing)),
            status.HTTP_400_BAD_REQUEST,
        )


async def save_attendance_records(
    db: AsyncSession,
    records: List[AttendanceRecordCreate],
) -> List[AttendanceRecordResponse]:
    """Upsert all records in one transaction; any invalid record fails the whole call."""
    await _validate_references(db, records)

    # Last occurrence wins when a batch names the same student twice
    latest: Dict[Tuple[int, int], AttendanceRecordCreate] = {}
    for r in records:
        latest[(r.class_session_id, r.student_id)] = r

    existing: Dict[Tuple[int, int], AttendanceRecord] = {}
    for session_id in {k[0] for k in latest}:
        result = await db.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.class_session_id == session_id,
                AttendanceRecord.student_id.in_([k[1] for k in latest if k[0] == session_id]),
            )
        )
        for row in result.scalars().all():
            existing[(row.class_session_id, row.student_id)] = row

    now = datetime.now(timezone.utc)
    saved: List[AttendanceRecord] = []
    for key, r in latest.items():
        row = existing.get(key)
        if row is None:
            row = AttendanceRecord(class_session_id=r.class_session_id, student_id=r.student_id)
            db.add(row)
        row.status = r.status.value
        row.timestamp = r.timestamp or now
        saved.append(row)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError("Attendance was saved concurrently; reload and retry", status.HTTP_409_CONFLICT)
    for row in saved:
        await db.refresh(row)
    return [_to_response(row) for row in saved]


async def create_attendance_record(db: AsyncSession, payload: AttendanceRecordCreate) -> AttendanceRecordResponse:
    saved = await save_attendance_records(db, [payload])
    return saved[0]


async def list_attendance_by_class_session(db: AsyncSession, class_session_id: int) -> List[AttendanceRecordResponse]:
    result = await db.execute(
        select(AttendanceRecord)
        .where(AttendanceRecord.class_session_id == class_session_id)
        .order_by(AttendanceRecord.student_id)
    )
    return [_to_response(r) for r in result.scalars().all()]


async def update_attendance_record(
    db: AsyncSession,
    record_id: int,
    payload: AttendanceRecordUpdate,
) -> Optional[AttendanceRecordResponse]:
    obj = await db.get(AttendanceRecord, record_id)
    if not obj:
        return None
    if payload.status is not None:
        obj.status = payload.status.value
    if payload.timestamp is not None:
        obj.timestamp = payload.timestamp
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)

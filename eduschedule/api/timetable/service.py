import logging
from typing import List, Optional, Union

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.models import User
from eduschedule.core.enums import ConflictType
from eduschedule.core.exceptions import NotFoundError, ServiceError
from eduschedule.core.models import SchoolClass, Subject, TimeSlot, TimetableEntry

from .conflicts import detect_conflicts
from .schemas import (
    CONFLICT_MESSAGES,
    ClassEntryCreate,
    ConflictReason,
    FreePeriodCreate,
    TimetableEntryResponse,
    TimetableEntryUpdate,
)

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Timetable entry conflicts with existing entries"


def _to_response(e: TimetableEntry) -> TimetableEntryResponse:
    return TimetableEntryResponse(
        id=e.id,
        teacher_id=e.teacher_id,
        class_id=e.class_id,
        subject_id=e.subject_id,
        time_slot_id=e.time_slot_id,
        day_of_week=e.day_of_week,
        room_number=e.room_number,
        is_free_period=bool(e.is_free_period),
    )


def _ordered(stmt):
    return stmt.outerjoin(TimeSlot, TimeSlot.id == TimetableEntry.time_slot_id).order_by(
        TimetableEntry.day_of_week, TimeSlot.start_time, TimetableEntry.id
    )


async def _validate_references(db: AsyncSession, candidate: TimetableEntry) -> None:
    teacher = await db.get(User, candidate.teacher_id)
    if not teacher:
        raise ServiceError("Invalid teacher", status.HTTP_400_BAD_REQUEST)
    if not await db.get(TimeSlot, candidate.time_slot_id):
        raise ServiceError("Invalid time slot", status.HTTP_400_BAD_REQUEST)
    if candidate.class_id is not None and not await db.get(SchoolClass, candidate.class_id):
        raise ServiceError("Invalid class", status.HTTP_400_BAD_REQUEST)
    if candidate.subject_id is not None and not await db.get(Subject, candidate.subject_id):
        raise ServiceError("Invalid subject", status.HTTP_400_BAD_REQUEST)


async def _entries_at(db: AsyncSession, day_of_week: int, time_slot_id: int) -> List[TimetableEntry]:
    # FOR UPDATE locks the rows sharing this day and slot until commit (no-op on SQLite)
    result = await db.execute(
        select(TimetableEntry)
        .where(
            TimetableEntry.day_of_week == day_of_week,
            TimetableEntry.time_slot_id == time_slot_id,
        )
        .with_for_update()
    )
    return list(result.scalars().all())


def _teacher_slot_taken(
    candidate: TimetableEntry,
    existing: List[TimetableEntry],
    exclude_id: Optional[int] = None,
) -> List[ConflictReason]:
    """A free period still occupies its teacher's slot, so any other row there blocks it."""
    ids = [e.id for e in existing if e.teacher_id == candidate.teacher_id and e.id != exclude_id]
    if not ids:
        return []
    return [
        ConflictReason(
            type=ConflictType.TEACHER,
            message=CONFLICT_MESSAGES[ConflictType.TEACHER],
            entry_ids=ids,
        )
    ]


async def find_conflicts(
    db: AsyncSession,
    candidate: TimetableEntry,
    exclude_id: Optional[int] = None,
) -> List[ConflictReason]:
    """Run the conflict detector against the stored entries at the candidate's day and slot.

    Free periods are exempt from the detector but may not share a slot with
    another entry of the same teacher.
    """
    existing = await _entries_at(db, candidate.day_of_week, candidate.time_slot_id)
    if candidate.is_free_period:
        return _teacher_slot_taken(candidate, existing, exclude_id=exclude_id)
    return detect_conflicts(candidate, existing, exclude_id=exclude_id)


def _raise_conflicts(conflicts: List[ConflictReason]) -> None:
    raise ServiceError(
        CONFLICT_MESSAGE,
        status.HTTP_409_CONFLICT,
        extra={"conflicts": [c.model_dump(by_alias=True, mode="json") for c in conflicts]},
    )


def build_candidate(payload: Union[ClassEntryCreate, FreePeriodCreate]) -> TimetableEntry:
    """Transient (unsaved) entry from a create payload."""
    return TimetableEntry(
        teacher_id=payload.teacher_id,
        class_id=payload.class_id,
        subject_id=payload.subject_id,
        time_slot_id=payload.time_slot_id,
        day_of_week=payload.day_of_week,
        room_number=payload.room_number,
        is_free_period=payload.is_free_period,
    )


async def check_timetable_conflicts(
    db: AsyncSession,
    payload: Union[ClassEntryCreate, FreePeriodCreate],
    exclude_id: Optional[int] = None,
) -> List[ConflictReason]:
    """Dry run for forms: report what a create (or an edit of ``exclude_id``) would clash with."""
    conflicts = await find_conflicts(db, build_candidate(payload), exclude_id=exclude_id)
    # Read-only: release the row locks taken by the lookup
    await db.rollback()
    return conflicts


async def create_timetable_entry(
    db: AsyncSession,
    payload: Union[ClassEntryCreate, FreePeriodCreate],
) -> TimetableEntryResponse:
    candidate = build_candidate(payload)
    await _validate_references(db, candidate)
    conflicts = await find_conflicts(db, candidate)
    if conflicts:
        await db.rollback()
        logger.warning(
            "Rejected timetable entry for teacher %s on day %s slot %s: %s",
            candidate.teacher_id,
            candidate.day_of_week,
            candidate.time_slot_id,
            ", ".join(c.type.value for c in conflicts),
        )
        _raise_conflicts(conflicts)
    try:
        db.add(candidate)
        await db.commit()
        await db.refresh(candidate)
    except IntegrityError:
        # Lost a race with a concurrent writer on one of the unique slot indexes
        await db.rollback()
        raise ServiceError(CONFLICT_MESSAGE, status.HTTP_409_CONFLICT)
    logger.info(
        "Created timetable entry %s (teacher %s, day %s, slot %s)",
        candidate.id,
        candidate.teacher_id,
        candidate.day_of_week,
        candidate.time_slot_id,
    )
    return _to_response(candidate)


async def list_timetable_entries(db: AsyncSession) -> List[TimetableEntryResponse]:
    result = await db.execute(_ordered(select(TimetableEntry)))
    return [_to_response(e) for e in result.scalars().all()]


async def list_timetable_entries_by_teacher(db: AsyncSession, teacher_id: int) -> List[TimetableEntryResponse]:
    result = await db.execute(_ordered(select(TimetableEntry).where(TimetableEntry.teacher_id == teacher_id)))
    return [_to_response(e) for e in result.scalars().all()]


async def list_timetable_entries_by_day(db: AsyncSession, day_of_week: int) -> List[TimetableEntryResponse]:
    result = await db.execute(_ordered(select(TimetableEntry).where(TimetableEntry.day_of_week == day_of_week)))
    return [_to_response(e) for e in result.scalars().all()]


async def get_timetable_entry(db: AsyncSession, entry_id: int) -> Optional[TimetableEntryResponse]:
    obj = await db.get(TimetableEntry, entry_id)
    return _to_response(obj) if obj else None


async def update_timetable_entry(
    db: AsyncSession,
    entry_id: int,
    payload: TimetableEntryUpdate,
) -> Optional[TimetableEntryResponse]:
    obj = await db.get(TimetableEntry, entry_id)
    if not obj:
        return None

    changes = payload.model_dump(exclude_unset=True)
    for field in ("teacher_id", "time_slot_id", "day_of_week", "is_free_period"):
        if field in changes and changes[field] is None:
            raise ServiceError(f"{field} cannot be null", status.HTTP_400_BAD_REQUEST)

    merged = {
        "teacher_id": obj.teacher_id,
        "class_id": obj.class_id,
        "subject_id": obj.subject_id,
        "time_slot_id": obj.time_slot_id,
        "day_of_week": obj.day_of_week,
        "room_number": obj.room_number,
        "is_free_period": bool(obj.is_free_period),
    }
    merged.update(changes)
    if merged["is_free_period"]:
        merged.update(class_id=None, subject_id=None, room_number=None)
    elif merged["class_id"] is None or merged["subject_id"] is None:
        raise ServiceError(
            "class_id and subject_id are required unless the entry is a free period",
            status.HTTP_400_BAD_REQUEST,
        )

    # Check on a transient copy so the stored row is not flushed before the check
    candidate = TimetableEntry(id=obj.id, **merged)
    await _validate_references(db, candidate)
    conflicts = await find_conflicts(db, candidate, exclude_id=obj.id)
    if conflicts:
        await db.rollback()
        logger.warning("Rejected update of timetable entry %s: %s", entry_id, ", ".join(c.type.value for c in conflicts))
        _raise_conflicts(conflicts)

    for field, value in merged.items():
        setattr(obj, field, value)
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        raise ServiceError(CONFLICT_MESSAGE, status.HTTP_409_CONFLICT)
    return _to_response(obj)


async def delete_timetable_entry(db: AsyncSession, entry_id: int) -> bool:
    """Delete an entry. Its class sessions are kept; they stay readable by id."""
    obj = await db.get(TimetableEntry, entry_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted timetable entry %s", entry_id)
    return True


async def get_timetable_entry_model(db: AsyncSession, entry_id: int) -> TimetableEntry:
    obj = await db.get(TimetableEntry, entry_id)
    if not obj:
        raise NotFoundError("Timetable entry")
    return obj

"""Double-booking checks for the weekly timetable.

Both checks are pure: they take the candidate and the rows already loaded by
the caller and never touch the database, so the same code backs the
pre-submit endpoint, the write path and the unit tests.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Set

from eduschedule.core.enums import ConflictType
from eduschedule.core.models import TimetableEntry

from .schemas import CONFLICT_MESSAGES, ConflictReason, SubstituteClash


def detect_conflicts(
    candidate: TimetableEntry,
    existing_entries: Iterable[TimetableEntry],
    exclude_id: Optional[int] = None,
) -> List[ConflictReason]:
    """Return every teacher/class/room clash for ``candidate``, in that order.

    Only entries on the same day and time slot are compared, and the entry with
    id ``exclude_id`` (the one being edited) is skipped. Free periods never
    conflict. Class and room checks only apply when the candidate has a class
    or a non-blank room; the teacher check always applies, so a lesson with no
    room or class set is still checked for a double-booked teacher.
    """
    if candidate.is_free_period:
        return []

    room = (candidate.room_number or "").strip() or None
    clashes = {ConflictType.TEACHER: [], ConflictType.CLASS: [], ConflictType.ROOM: []}
    for entry in existing_entries:
        if entry.day_of_week != candidate.day_of_week or entry.time_slot_id != candidate.time_slot_id:
            continue
        if exclude_id is not None and entry.id == exclude_id:
            continue
        if entry.teacher_id == candidate.teacher_id:
            clashes[ConflictType.TEACHER].append(entry.id)
        if candidate.class_id is not None and entry.class_id == candidate.class_id:
            clashes[ConflictType.CLASS].append(entry.id)
        if room is not None and (entry.room_number or "").strip() == room:
            clashes[ConflictType.ROOM].append(entry.id)

    return [
        ConflictReason(type=kind, message=CONFLICT_MESSAGES[kind], entry_ids=ids)
        for kind, ids in clashes.items()
        if ids
    ]


def weekdays_in_range(start: date, end: date) -> Set[int]:
    """ISO weekdays (1=Monday .. 7=Sunday) covered by the inclusive range."""
    if end < start:
        return set()
    span = (end - start).days + 1
    if span >= 7:
        return set(range(1, 8))
    return {(start + timedelta(days=i)).isoweekday() for i in range(span)}


def detect_substitute_clashes(
    original_entries: Iterable[TimetableEntry],
    substitute_entries: Iterable[TimetableEntry],
    days: Set[int],
) -> List[SubstituteClash]:
    """Slots the substitute must cover but already teaches in.

    Free periods on either side never clash: nothing needs covering, or the
    substitute is available.
    """
    busy = {
        (e.day_of_week, e.time_slot_id): e.id
        for e in substitute_entries
        if not e.is_free_period
    }
    clashes: List[SubstituteClash] = []
    for entry in sorted(original_entries, key=lambda e: (e.day_of_week, e.time_slot_id, e.id)):
        if entry.is_free_period or entry.day_of_week not in days:
            continue
        clashing_id = busy.get((entry.day_of_week, entry.time_slot_id))
        if clashing_id is not None:
            clashes.append(
                SubstituteClash(
                    timetable_entry_id=entry.id,
                    day_of_week=entry.day_of_week,
                    time_slot_id=entry.time_slot_id,
                    clashing_entry_id=clashing_id,
                )
            )
    return clashes

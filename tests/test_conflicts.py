from datetime import date

from eduschedule.api.timetable.conflicts import (
    detect_conflicts,
    detect_substitute_clashes,
    weekdays_in_range,
)
from eduschedule.core.enums import ConflictType
from eduschedule.core.models import TimetableEntry


def _entry(id=None, teacher_id=1, class_id=1, subject_id=1, time_slot_id=1, day_of_week=1, room_number=None, is_free_period=False):
    return TimetableEntry(
        id=id,
        teacher_id=teacher_id,
        class_id=class_id,
        subject_id=subject_id,
        time_slot_id=time_slot_id,
        day_of_week=day_of_week,
        room_number=room_number,
        is_free_period=is_free_period,
    )


def test_no_existing_entries_means_no_conflicts() -> None:
    assert detect_conflicts(_entry(), []) == []


def test_same_teacher_same_slot_is_teacher_conflict() -> None:
    existing = [_entry(id=10, class_id=1)]
    candidate = _entry(class_id=2)

    conflicts = detect_conflicts(candidate, existing)

    assert [c.type for c in conflicts] == [ConflictType.TEACHER]
    assert conflicts[0].entry_ids == [10]
    assert conflicts[0].message == "Teacher is already assigned to another class at this time"


def test_other_day_or_slot_never_conflicts() -> None:
    existing = [_entry(id=10, day_of_week=2), _entry(id=11, time_slot_id=2)]
    assert detect_conflicts(_entry(room_number="101"), existing) == []


def test_different_teacher_same_class_is_class_conflict() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=1)]
    candidate = _entry(teacher_id=2, class_id=1)

    conflicts = detect_conflicts(candidate, existing)

    assert [c.type for c in conflicts] == [ConflictType.CLASS]
    assert conflicts[0].message == "Class already has another teacher at this time"


def test_room_only_conflict_between_different_teachers_and_classes() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=1, room_number="101")]
    candidate = _entry(teacher_id=2, class_id=2, room_number="101")

    conflicts = detect_conflicts(candidate, existing)

    assert [c.type for c in conflicts] == [ConflictType.ROOM]
    assert conflicts[0].entry_ids == [10]


def test_all_clashes_reported_in_teacher_class_room_order() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=1, room_number="101")]
    candidate = _entry(teacher_id=1, class_id=1, room_number=" 101 ")

    conflicts = detect_conflicts(candidate, existing)

    assert [c.type for c in conflicts] == [ConflictType.TEACHER, ConflictType.CLASS, ConflictType.ROOM]


def test_free_period_candidate_never_conflicts() -> None:
    existing = [_entry(id=10, teacher_id=1)]
    candidate = _entry(teacher_id=1, class_id=None, subject_id=None, is_free_period=True)

    assert detect_conflicts(candidate, existing) == []


def test_existing_free_period_still_blocks_the_teacher() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=None, subject_id=None, is_free_period=True)]
    conflicts = detect_conflicts(_entry(teacher_id=1), existing)
    assert [c.type for c in conflicts] == [ConflictType.TEACHER]


def test_blank_room_and_missing_class_skip_those_checks() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=None, room_number="  ")]
    candidate = _entry(teacher_id=2, class_id=None, room_number="")

    assert detect_conflicts(candidate, existing) == []


def test_excluded_entry_is_ignored() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=1, room_number="101")]
    candidate = _entry(id=10, teacher_id=1, class_id=1, room_number="101")

    assert detect_conflicts(candidate, existing, exclude_id=10) == []


def test_exclude_id_does_not_hide_other_clashes() -> None:
    existing = [_entry(id=10, teacher_id=1), _entry(id=11, teacher_id=1, class_id=3)]
    conflicts = detect_conflicts(_entry(id=10, teacher_id=1, class_id=2), existing, exclude_id=10)
    assert conflicts[0].entry_ids == [11]


def test_weekdays_in_range() -> None:
    # 2024-01-01 is a Monday
    assert weekdays_in_range(date(2024, 1, 1), date(2024, 1, 1)) == {1}
    assert weekdays_in_range(date(2024, 1, 5), date(2024, 1, 8)) == {5, 6, 7, 1}
    assert weekdays_in_range(date(2024, 1, 1), date(2024, 1, 31)) == set(range(1, 8))
    assert weekdays_in_range(date(2024, 1, 2), date(2024, 1, 1)) == set()


def test_substitute_clashes_only_on_covered_busy_slots() -> None:
    original = [
        _entry(id=1, teacher_id=1, day_of_week=1, time_slot_id=1),
        _entry(id=2, teacher_id=1, day_of_week=1, time_slot_id=2),
        _entry(id=3, teacher_id=1, day_of_week=3, time_slot_id=1),
        _entry(id=4, teacher_id=1, day_of_week=1, time_slot_id=3, class_id=None, subject_id=None, is_free_period=True),
    ]
    substitute = [
        _entry(id=20, teacher_id=2, day_of_week=1, time_slot_id=1, class_id=5),
        _entry(id=21, teacher_id=2, day_of_week=1, time_slot_id=2, class_id=None, subject_id=None, is_free_period=True),
        _entry(id=22, teacher_id=2, day_of_week=3, time_slot_id=1, class_id=6),
        _entry(id=23, teacher_id=2, day_of_week=1, time_slot_id=3, class_id=7),
    ]

    clashes = detect_substitute_clashes(original, substitute, days={1, 2})

    assert len(clashes) == 1
    assert clashes[0].timetable_entry_id == 1
    assert clashes[0].clashing_entry_id == 20
    assert clashes[0].day_of_week == 1


def test_teacher_checked_when_room_is_missing() -> None:
    existing = [_entry(id=10, teacher_id=1, class_id=1, room_number=None)]
    candidate = _entry(teacher_id=1, class_id=2, room_number=None)

    assert [c.type for c in detect_conflicts(candidate, existing)] == [ConflictType.TEACHER]

from typing import Dict, List

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.api.timetable import service as timetable_service
from eduschedule.auth.models import User
from eduschedule.core.models import TimetableEntry


def _class_entry(teacher_id: int, school: Dict[str, List[int]], **overrides) -> dict:
    payload = {
        "teacherId": teacher_id,
        "classId": school["classes"][0],
        "subjectId": school["subjects"][0],
        "timeSlotId": school["slots"][0],
        "dayOfWeek": 1,
        "roomNumber": "101",
    }
    payload.update(overrides)
    return payload


async def _count_entries(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(TimetableEntry))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_create_class_entry(admin_client: AsyncClient, teacher: User, school) -> None:
    response = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))

    assert response.status_code == 201
    data = response.json()
    assert data["id"] > 0
    assert data["teacherId"] == teacher.id
    assert data["classId"] == school["classes"][0]
    assert data["roomNumber"] == "101"
    assert data["isFreePeriod"] is False


@pytest.mark.asyncio
async def test_teacher_double_booking_is_rejected(
    admin_client: AsyncClient, db_session: AsyncSession, teacher: User, school
) -> None:
    first = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, roomNumber=None))
    assert first.status_code == 201

    second = await admin_client.post(
        "/api/timetable",
        json=_class_entry(teacher.id, school, classId=school["classes"][1], roomNumber=None),
    )

    assert second.status_code == 409
    detail = second.json()["detail"]
    assert detail["message"] == "Timetable entry conflicts with existing entries"
    assert detail["conflicts"] == [
        {
            "type": "teacher",
            "message": "Teacher is already assigned to another class at this time",
            "entryIds": [first.json()["id"]],
        }
    ]
    assert await _count_entries(db_session) == 1


@pytest.mark.asyncio
async def test_same_teacher_other_slot_is_allowed(admin_client: AsyncClient, teacher: User, school) -> None:
    await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    response = await admin_client.post(
        "/api/timetable",
        json=_class_entry(teacher.id, school, timeSlotId=school["slots"][1]),
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_class_conflict_with_another_teacher(
    admin_client: AsyncClient, teacher: User, other_teacher: User, school
) -> None:
    await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, roomNumber=None))
    response = await admin_client.post(
        "/api/timetable", json=_class_entry(other_teacher.id, school, roomNumber=None)
    )

    assert response.status_code == 409
    assert [c["type"] for c in response.json()["detail"]["conflicts"]] == ["class"]


@pytest.mark.asyncio
async def test_conflict_check_reports_room_only(
    admin_client: AsyncClient, db_session: AsyncSession, teacher: User, other_teacher: User, school
) -> None:
    await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, roomNumber="101"))

    response = await admin_client.post(
        "/api/timetable/conflicts",
        json=_class_entry(other_teacher.id, school, classId=school["classes"][1], roomNumber="101"),
    )

    assert response.status_code == 200
    conflicts = response.json()["conflicts"]
    assert len(conflicts) == 1
    assert conflicts[0]["type"] == "room"
    assert conflicts[0]["message"] == "Room is already occupied at this time"
    # Dry run only
    assert await _count_entries(db_session) == 1


@pytest.mark.asyncio
async def test_conflict_check_with_exclude_id(admin_client: AsyncClient, teacher: User, school) -> None:
    created = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    entry_id = created.json()["id"]

    response = await admin_client.post(
        f"/api/timetable/conflicts?excludeId={entry_id}",
        json=_class_entry(teacher.id, school),
    )

    assert response.status_code == 200
    assert response.json()["conflicts"] == []


@pytest.mark.asyncio
async def test_free_period_skips_conflict_checks(admin_client: AsyncClient, teacher: User, school) -> None:
    response = await admin_client.post(
        "/api/timetable",
        json={
            "teacherId": teacher.id,
            "timeSlotId": school["slots"][0],
            "dayOfWeek": 2,
            "isFreePeriod": True,
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["isFreePeriod"] is True
    assert data["classId"] is None
    assert data["subjectId"] is None
    assert data["roomNumber"] is None


@pytest.mark.asyncio
async def test_free_period_with_class_is_rejected(admin_client: AsyncClient, teacher: User, school) -> None:
    response = await admin_client.post(
        "/api/timetable",
        json={
            "teacherId": teacher.id,
            "classId": school["classes"][0],
            "timeSlotId": school["slots"][0],
            "dayOfWeek": 2,
            "isFreePeriod": True,
        },
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


@pytest.mark.asyncio
async def test_class_entry_requires_subject(admin_client: AsyncClient, teacher: User, school) -> None:
    payload = _class_entry(teacher.id, school)
    del payload["subjectId"]

    response = await admin_client.post("/api/timetable", json=payload)

    assert response.status_code == 400
    assert any(e["field"].endswith("subjectId") for e in response.json()["errors"])


@pytest.mark.asyncio
async def test_day_of_week_out_of_range(admin_client: AsyncClient, teacher: User, school) -> None:
    response = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, dayOfWeek=8))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_references_are_rejected(admin_client: AsyncClient, teacher: User, school) -> None:
    response = await admin_client.post("/api/timetable", json=_class_entry(999, school))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid teacher"

    response = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, timeSlotId=999))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid time slot"


@pytest.mark.asyncio
async def test_teacher_cannot_create_entries(teacher_client: AsyncClient, teacher: User, school) -> None:
    response = await teacher_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/timetable")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_by_teacher_and_day(
    admin_client: AsyncClient, teacher_client: AsyncClient, teacher: User, other_teacher: User, school
) -> None:
    a = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, dayOfWeek=1, roomNumber=None))
    b = await admin_client.post(
        "/api/timetable",
        json=_class_entry(teacher.id, school, dayOfWeek=3, timeSlotId=school["slots"][1], roomNumber=None),
    )
    c = await admin_client.post(
        "/api/timetable",
        json=_class_entry(other_teacher.id, school, dayOfWeek=1, classId=school["classes"][1], roomNumber=None),
    )
    assert {a.status_code, b.status_code, c.status_code} == {201}

    by_teacher = await teacher_client.get(f"/api/timetable/teacher/{teacher.id}")
    assert by_teacher.status_code == 200
    assert [e["id"] for e in by_teacher.json()] == [a.json()["id"], b.json()["id"]]

    by_day = await teacher_client.get("/api/timetable/day/1")
    assert sorted(e["id"] for e in by_day.json()) == sorted([a.json()["id"], c.json()["id"]])

    assert (await teacher_client.get("/api/timetable/day/6")).json() == []
    assert (await teacher_client.get("/api/timetable/day/0")).status_code == 400

    everything = await teacher_client.get("/api/timetable")
    assert len(everything.json()) == 3


@pytest.mark.asyncio
async def test_get_entry(admin_client: AsyncClient, teacher: User, school) -> None:
    created = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    entry_id = created.json()["id"]

    response = await admin_client.get(f"/api/timetable/{entry_id}")
    assert response.status_code == 200
    assert response.json() == created.json()

    assert (await admin_client.get("/api/timetable/999")).status_code == 404


@pytest.mark.asyncio
async def test_update_entry_does_not_conflict_with_itself(admin_client: AsyncClient, teacher: User, school) -> None:
    created = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    entry_id = created.json()["id"]

    response = await admin_client.put(f"/api/timetable/{entry_id}", json={"roomNumber": "202"})

    assert response.status_code == 200
    data = response.json()
    assert data["roomNumber"] == "202"
    assert data["classId"] == school["classes"][0]
    assert data["dayOfWeek"] == 1


@pytest.mark.asyncio
async def test_update_entry_into_occupied_slot(admin_client: AsyncClient, teacher: User, school) -> None:
    await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school, roomNumber=None))
    second = await admin_client.post(
        "/api/timetable",
        json=_class_entry(teacher.id, school, timeSlotId=school["slots"][1], roomNumber=None),
    )

    response = await admin_client.put(
        f"/api/timetable/{second.json()['id']}", json={"timeSlotId": school["slots"][0]}
    )

    assert response.status_code == 409
    types = [c["type"] for c in response.json()["detail"]["conflicts"]]
    assert types == ["teacher", "class"]

    unchanged = await admin_client.get(f"/api/timetable/{second.json()['id']}")
    assert unchanged.json()["timeSlotId"] == school["slots"][1]


@pytest.mark.asyncio
async def test_update_to_free_period_clears_class_fields(admin_client: AsyncClient, teacher: User, school) -> None:
    created = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))

    response = await admin_client.put(f"/api/timetable/{created.json()['id']}", json={"isFreePeriod": True})

    assert response.status_code == 200
    data = response.json()
    assert data["isFreePeriod"] is True
    assert data["classId"] is None
    assert data["subjectId"] is None
    assert data["roomNumber"] is None


@pytest.mark.asyncio
async def test_update_missing_entry(admin_client: AsyncClient) -> None:
    response = await admin_client.put("/api/timetable/999", json={"roomNumber": "1"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_entry(admin_client: AsyncClient, db_session: AsyncSession, teacher: User, school) -> None:
    created = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    entry_id = created.json()["id"]

    response = await admin_client.delete(f"/api/timetable/{entry_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert await _count_entries(db_session) == 0

    again = await admin_client.delete(f"/api/timetable/{entry_id}")
    assert again.status_code == 404


def _free_period(teacher_id: int, time_slot_id: int, day_of_week: int = 1) -> dict:
    return {
        "teacherId": teacher_id,
        "timeSlotId": time_slot_id,
        "dayOfWeek": day_of_week,
        "isFreePeriod": True,
    }


@pytest.mark.asyncio
async def test_free_period_on_taught_slot_is_rejected(
    admin_client: AsyncClient, db_session: AsyncSession, teacher: User, school
) -> None:
    lesson = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    lesson_id = lesson.json()["id"]

    response = await admin_client.post("/api/timetable", json=_free_period(teacher.id, school["slots"][0]))

    assert response.status_code == 409
    assert response.json()["detail"]["conflicts"] == [
        {
            "type": "teacher",
            "message": "Teacher is already assigned to another class at this time",
            "entryIds": [lesson_id],
        }
    ]
    assert await _count_entries(db_session) == 1

    # The lesson stays editable
    edited = await admin_client.put(f"/api/timetable/{lesson_id}", json={"roomNumber": "202"})
    assert edited.status_code == 200


@pytest.mark.asyncio
async def test_free_period_cannot_move_onto_a_lesson(admin_client: AsyncClient, teacher: User, school) -> None:
    lesson = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    free = await admin_client.post("/api/timetable", json=_free_period(teacher.id, school["slots"][1]))
    assert free.status_code == 201

    response = await admin_client.put(
        f"/api/timetable/{free.json()['id']}", json={"timeSlotId": school["slots"][0]}
    )

    assert response.status_code == 409
    assert response.json()["detail"]["conflicts"][0]["entryIds"] == [lesson.json()["id"]]


@pytest.mark.asyncio
async def test_lesson_turned_free_period_cannot_share_a_slot(
    admin_client: AsyncClient, teacher: User, school
) -> None:
    await admin_client.post("/api/timetable", json=_free_period(teacher.id, school["slots"][0]))
    lesson = await admin_client.post(
        "/api/timetable", json=_class_entry(teacher.id, school, timeSlotId=school["slots"][1])
    )

    response = await admin_client.put(
        f"/api/timetable/{lesson.json()['id']}",
        json={"isFreePeriod": True, "timeSlotId": school["slots"][0]},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_conflict_check_reports_free_period_clash(admin_client: AsyncClient, teacher: User, school) -> None:
    await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))

    response = await admin_client.post(
        "/api/timetable/conflicts", json=_free_period(teacher.id, school["slots"][0])
    )

    assert [c["type"] for c in response.json()["conflicts"]] == ["teacher"]


@pytest.mark.asyncio
@pytest.mark.parametrize("is_free_period", [False, True])
async def test_unique_index_blocks_second_row_for_teacher_slot(
    db_session: AsyncSession, teacher: User, school, entry_id: int, is_free_period: bool
) -> None:
    teacher_id = teacher.id
    db_session.add(
        TimetableEntry(
            teacher_id=teacher_id,
            class_id=None if is_free_period else school["classes"][1],
            subject_id=None if is_free_period else school["subjects"][1],
            time_slot_id=school["slots"][0],
            day_of_week=1,
            room_number=None if is_free_period else "102",
            is_free_period=is_free_period,
        )
    )

    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()


@pytest.mark.asyncio
async def test_unique_index_allows_other_teachers_free_period(
    db_session: AsyncSession, other_teacher: User, school, entry_id: int
) -> None:
    db_session.add(
        TimetableEntry(
            teacher_id=other_teacher.id,
            time_slot_id=school["slots"][0],
            day_of_week=1,
            is_free_period=True,
        )
    )
    await db_session.commit()

    assert await _count_entries(db_session) == 2


@pytest.mark.asyncio
async def test_concurrent_double_booking_maps_to_conflict(
    admin_client: AsyncClient, db_session: AsyncSession, teacher: User, school, monkeypatch
) -> None:
    first = await admin_client.post("/api/timetable", json=_class_entry(teacher.id, school))
    second = await admin_client.post(
        "/api/timetable", json=_class_entry(teacher.id, school, timeSlotId=school["slots"][1])
    )
    assert first.status_code == second.status_code == 201

    # Simulate a writer that passed the check before the other row was committed
    async def no_conflicts(db, candidate, exclude_id=None):
        return []

    monkeypatch.setattr(timetable_service, "find_conflicts", no_conflicts)

    created = await admin_client.post(
        "/api/timetable",
        json=_class_entry(teacher.id, school, classId=school["classes"][1], roomNumber="102"),
    )
    assert created.status_code == 409
    assert created.json()["detail"] == "Timetable entry conflicts with existing entries"
    assert await _count_entries(db_session) == 2

    moved = await admin_client.put(
        f"/api/timetable/{second.json()['id']}", json={"timeSlotId": school["slots"][0]}
    )
    assert moved.status_code == 409
    assert moved.json()["detail"] == "Timetable entry conflicts with existing entries"

    unchanged = await admin_client.get(f"/api/timetable/{second.json()['id']}")
    assert unchanged.json()["timeSlotId"] == school["slots"][1]

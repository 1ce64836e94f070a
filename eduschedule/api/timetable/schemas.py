"""Timetable entry payloads.

Input is a tagged union: a class entry (teacher teaches a class a subject,
optionally in a named room) or a free period (no class, subject or room).
The isFreePeriod flag picks the variant.
"""

from datetime import date
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Discriminator, Field, RootModel, Tag, field_validator

from eduschedule.core.enums import ConflictType
from eduschedule.core.schemas import CamelModel

DayOfWeek = Annotated[int, Field(ge=1, le=7, description="1=Monday .. 7=Sunday")]

CONFLICT_MESSAGES = {
    ConflictType.TEACHER: "Teacher is already assigned to another class at this time",
    ConflictType.CLASS: "Class already has another teacher at this time",
    ConflictType.ROOM: "Room is already occupied at this time",
}


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class ClassEntryCreate(CamelModel):
    is_free_period: Literal[False] = False
    teacher_id: int
    time_slot_id: int
    day_of_week: DayOfWeek
    class_id: int
    subject_id: int
    room_number: Optional[str] = Field(None, max_length=50)

    @field_validator("room_number")
    @classmethod
    def strip_room(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class FreePeriodCreate(CamelModel):
    is_free_period: Literal[True]
    teacher_id: int
    time_slot_id: int
    day_of_week: DayOfWeek
    # Accepted only as null so clients may send the full form shape
    class_id: None = None
    subject_id: None = None
    room_number: None = None


def _entry_kind(v: Any) -> str:
    if isinstance(v, dict):
        flag = v.get("isFreePeriod", v.get("is_free_period", False))
    else:
        flag = getattr(v, "is_free_period", False)
    if flag is True or str(flag).lower() == "true":
        return "free"
    return "class"


class TimetableEntryCreate(
    RootModel[
        Annotated[
            Union[
                Annotated[ClassEntryCreate, Tag("class")],
                Annotated[FreePeriodCreate, Tag("free")],
            ],
            Discriminator(_entry_kind),
        ]
    ]
):
    pass


class TimetableEntryUpdate(CamelModel):
    """Partial update. Fields left out keep their stored value; explicit nulls clear them."""

    teacher_id: Optional[int] = None
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    time_slot_id: Optional[int] = None
    day_of_week: Optional[DayOfWeek] = None
    room_number: Optional[str] = Field(None, max_length=50)
    is_free_period: Optional[bool] = None

    @field_validator("room_number")
    @classmethod
    def strip_room(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class TimetableEntryResponse(CamelModel):
    id: int
    teacher_id: int
    class_id: Optional[int] = None
    subject_id: Optional[int] = None
    time_slot_id: int
    day_of_week: int
    room_number: Optional[str] = None
    is_free_period: bool


class ConflictReason(CamelModel):
    type: ConflictType
    message: str
    entry_ids: List[int]


class ConflictCheckResponse(CamelModel):
    conflicts: List[ConflictReason]


class SubstituteClash(CamelModel):
    """The substitute already teaches at a slot the absent teacher needs covered."""

    timetable_entry_id: int
    day_of_week: int
    time_slot_id: int
    clashing_entry_id: int


class EffectiveTeacherResponse(CamelModel):
    timetable_entry_id: int
    date: date
    teacher_id: int
    original_teacher_id: int
    substitution_id: Optional[int] = None

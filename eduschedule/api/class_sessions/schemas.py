from datetime import date
from typing import Optional

from eduschedule.core.schemas import CamelModel


class ClassSessionCreate(CamelModel):
    timetable_entry_id: int
    date: date
    notes: Optional[str] = None
    lesson_plan: Optional[str] = None


class ClassSessionUpdate(CamelModel):
    notes: Optional[str] = None
    lesson_plan: Optional[str] = None


class ClassSessionResponse(CamelModel):
    id: int
    timetable_entry_id: int
    date: date
    notes: Optional[str] = None
    lesson_plan: Optional[str] = None

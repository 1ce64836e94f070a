from datetime import date
from typing import List, Optional

from pydantic import model_validator

from eduschedule.api.timetable.schemas import SubstituteClash
from eduschedule.core.enums import SubstitutionRole
from eduschedule.core.schemas import CamelModel

END_BEFORE_START_MESSAGE = "End date must be on or after start date"


class SubstitutionCreate(CamelModel):
    original_teacher_id: int
    substitute_teacher_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None

    @model_validator(mode="after")
    def validate_range(self) -> "SubstitutionCreate":
        if self.end_date < self.start_date:
            raise ValueError(END_BEFORE_START_MESSAGE)
        if self.original_teacher_id == self.substitute_teacher_id:
            raise ValueError("A teacher cannot substitute for themselves")
        return self


class SubstitutionResponse(CamelModel):
    id: int
    original_teacher_id: int
    substitute_teacher_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None


class TeacherSubstitutionResponse(SubstitutionResponse):
    """Substitution seen from one teacher: absent (they are replaced) or substitute (they cover)."""

    role: SubstitutionRole


class SubstitutionClashReport(CamelModel):
    substitution_id: int
    clashes: List[SubstituteClash]

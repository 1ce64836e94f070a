from datetime import date
from typing import Optional

from pydantic import Field

from eduschedule.core.schemas import CamelModel


class SettingsUpdate(CamelModel):
    semester_start_date: Optional[date] = None
    semester_end_date: Optional[date] = None
    school_name: Optional[str] = Field(None, min_length=1, max_length=255)


class SettingsResponse(CamelModel):
    id: int
    semester_start_date: date
    semester_end_date: date
    school_name: str

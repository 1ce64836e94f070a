from datetime import datetime, time
from typing import Optional, Union

from pydantic import Field, field_validator, model_validator

from eduschedule.core.schemas import CamelModel


def _normalize_time_24(v: Union[str, time]) -> str:
    """Normalise a 24-hour time (HH:MM, H:MM or HH:MM:SS) to fixed-width HH:MM."""
    if isinstance(v, time):
        return v.strftime("%H:%M")
    if isinstance(v, str):
        v = v.strip()
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(v, fmt).strftime("%H:%M")
            except ValueError:
                continue
    raise ValueError("start_time/end_time must be 24-hour string (e.g. 09:00, 13:15)")


class TimeSlotCreate(CamelModel):
    start_time: str = Field(..., description="24-hour format, e.g. 09:00")
    end_time: str = Field(..., description="24-hour format, e.g. 10:00")
    label: str = Field(..., min_length=1, max_length=100)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Union[str, time]) -> str:
        return _normalize_time_24(v)

    @model_validator(mode="after")
    def validate_order(self) -> "TimeSlotCreate":
        # Fixed-width HH:MM compares correctly as a string
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class TimeSlotUpdate(CamelModel):
    start_time: Optional[str] = Field(None, description="24-hour format, e.g. 09:00")
    end_time: Optional[str] = Field(None, description="24-hour format, e.g. 10:00")
    label: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Optional[Union[str, time]]) -> Optional[str]:
        if v is None:
            return None
        return _normalize_time_24(v)


class TimeSlotResponse(CamelModel):
    id: int
    start_time: str
    end_time: str
    label: str

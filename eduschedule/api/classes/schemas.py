from typing import Optional

from pydantic import Field

from eduschedule.core.schemas import CamelModel


class ClassCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    grade: str = Field(..., min_length=1, max_length=20)
    section: str = Field(..., min_length=1, max_length=20)
    room_number: Optional[str] = Field(None, max_length=50)


class ClassUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    grade: Optional[str] = Field(None, min_length=1, max_length=20)
    section: Optional[str] = Field(None, min_length=1, max_length=20)
    room_number: Optional[str] = Field(None, max_length=50)


class ClassResponse(CamelModel):
    id: int
    name: str
    grade: str
    section: str
    room_number: Optional[str] = None

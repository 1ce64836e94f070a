"""Homework schemas."""

from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from eduschedule.core.schemas import CamelModel


def _clean_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("title must not be blank")
    return v


class HomeworkCreate(CamelModel):
    class_session_id: int
    title: str = Field(..., min_length=1)
    description: str
    due_date: date

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _clean_title(v)


class HomeworkUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return _clean_title(v)


class HomeworkResponse(CamelModel):
    id: int
    class_session_id: int
    title: str
    description: str
    due_date: date

from typing import Optional

from pydantic import EmailStr, Field

from eduschedule.core.schemas import CamelModel


class StudentCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    class_id: int
    email: Optional[EmailStr] = None


class StudentResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    class_id: int
    email: Optional[str] = None

from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from eduschedule.auth.schemas import UserInfo
from eduschedule.core.enums import UserRole
from eduschedule.core.schemas import CamelModel


class UserCreate(CamelModel):
    username: Optional[str] = Field(None, min_length=3, max_length=100, description="Defaults to first.last")
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.TEACHER
    subjects: List[str] = Field(default_factory=list)

    @field_validator("subjects")
    @classmethod
    def clean_subjects(cls, v: List[str]) -> List[str]:
        # Keep first occurrence order, drop blanks
        return list(dict.fromkeys(s.strip() for s in v if s and s.strip()))


UserResponse = UserInfo

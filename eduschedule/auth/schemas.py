from typing import List

from pydantic import BaseModel, EmailStr

from eduschedule.core.enums import UserRole
from eduschedule.core.schemas import CamelModel


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserInfo(CamelModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    subjects: List[str] = []


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserInfo


class CurrentUserResponse(BaseModel):
    user: UserInfo


class CurrentUser(BaseModel):
    """Authenticated principal for one request.

    Resolved from the bearer token by get_current_user and handed to services
    explicitly; nothing reads it from ambient state.
    """

    id: int
    role: UserRole
    email: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

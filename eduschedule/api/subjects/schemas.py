from typing import Optional

from pydantic import Field

from eduschedule.core.schemas import CamelModel

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class SubjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    color: str = Field(..., pattern=HEX_COLOR, description="Hex color, e.g. #FF5733")


class SubjectUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)


class SubjectResponse(CamelModel):
    id: int
    name: str
    color: str

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from eduschedule.core.enums import AttendanceStatus
from eduschedule.core.schemas import CamelModel


class AttendanceRecordCreate(CamelModel):
    class_session_id: int
    student_id: int
    status: AttendanceStatus
    timestamp: Optional[datetime] = Field(None, description="Defaults to the time the record is saved")


class AttendanceBatchCreate(CamelModel):
    records: List[AttendanceRecordCreate] = Field(..., min_length=1)


class AttendanceRecordUpdate(CamelModel):
    status: Optional[AttendanceStatus] = None
    timestamp: Optional[datetime] = None


class AttendanceRecordResponse(CamelModel):
    id: int
    class_session_id: int
    student_id: int
    status: AttendanceStatus
    timestamp: datetime

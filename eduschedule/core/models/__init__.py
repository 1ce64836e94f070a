from eduschedule.auth.models import User
from eduschedule.core.models.attendance_record import AttendanceRecord
from eduschedule.core.models.class_model import SchoolClass
from eduschedule.core.models.class_session import ClassSession
from eduschedule.core.models.homework import Homework
from eduschedule.core.models.school_settings import SchoolSettings
from eduschedule.core.models.student import Student
from eduschedule.core.models.subject import Subject
from eduschedule.core.models.substitution import Substitution
from eduschedule.core.models.time_slot import TimeSlot
from eduschedule.core.models.timetable import TimetableEntry

__all__ = [
    "AttendanceRecord",
    "ClassSession",
    "Homework",
    "SchoolClass",
    "SchoolSettings",
    "Student",
    "Subject",
    "Substitution",
    "TimeSlot",
    "TimetableEntry",
    "User",
]

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class ConflictType(str, Enum):
    TEACHER = "teacher"
    CLASS = "class"
    ROOM = "room"


class SubstitutionRole(str, Enum):
    """How a teacher takes part in a substitution: the one away, or the one covering."""

    ABSENT = "absent"
    SUBSTITUTE = "substitute"

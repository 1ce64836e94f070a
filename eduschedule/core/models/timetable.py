"""Weekly timetable grid. One row per teacher/day/time slot: a taught class or a free period."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, and_, false
from sqlalchemy.orm import relationship

from eduschedule.db.session import Base


class TimetableEntry(Base):
    __tablename__ = "timetable_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    teacher_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    # class_id, subject_id and room_number are always null on free periods
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="RESTRICT"), nullable=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="RESTRICT"), nullable=True)
    time_slot_id = Column(Integer, ForeignKey("time_slots.id", ondelete="RESTRICT"), nullable=False)
    day_of_week = Column(Integer, nullable=False, index=True)  # 1=Monday .. 7=Sunday
    room_number = Column(String(50), nullable=True)
    is_free_period = Column(Boolean, nullable=False, default=False)

    teacher = relationship("User", foreign_keys=[teacher_id])
    school_class = relationship("SchoolClass", foreign_keys=[class_id])
    subject = relationship("Subject", foreign_keys=[subject_id])
    time_slot = relationship("TimeSlot", foreign_keys=[time_slot_id])


# Backstop for concurrent writers: the conflict check runs in the write transaction,
# these indexes make the losing insert fail instead of double-booking.
# A teacher holds at most one row per day and slot, free periods included.
Index(
    "uq_timetable_teacher_slot",
    TimetableEntry.teacher_id,
    TimetableEntry.day_of_week,
    TimetableEntry.time_slot_id,
    unique=True,
)

_taught = TimetableEntry.is_free_period == false()

Index(
    "uq_timetable_class_slot",
    TimetableEntry.class_id,
    TimetableEntry.day_of_week,
    TimetableEntry.time_slot_id,
    unique=True,
    postgresql_where=and_(_taught, TimetableEntry.class_id.isnot(None)),
    sqlite_where=and_(_taught, TimetableEntry.class_id.isnot(None)),
)
Index(
    "uq_timetable_room_slot",
    TimetableEntry.room_number,
    TimetableEntry.day_of_week,
    TimetableEntry.time_slot_id,
    unique=True,
    postgresql_where=and_(_taught, TimetableEntry.room_number.isnot(None), TimetableEntry.room_number != ""),
    sqlite_where=and_(_taught, TimetableEntry.room_number.isnot(None), TimetableEntry.room_number != ""),
)

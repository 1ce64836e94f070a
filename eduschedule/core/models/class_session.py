"""A dated occurrence of a timetable entry, with the teacher's notes and lesson plan."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer, Text, UniqueConstraint

from eduschedule.db.session import Base


class ClassSession(Base):
    __tablename__ = "class_sessions"
    __table_args__ = (
        # One session per timetable entry per calendar date
        UniqueConstraint("timetable_entry_id", "date", name="uq_class_session_entry_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No FK: deleting a timetable entry leaves its sessions (and their attendance) readable
    timetable_entry_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    lesson_plan = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

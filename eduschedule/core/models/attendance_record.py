from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from eduschedule.db.session import Base


class AttendanceRecord(Base):
    """Student attendance for one class session. One row per student per session."""

    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("class_session_id", "student_id", name="uq_attendance_session_student"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_session_id = Column(Integer, ForeignKey("class_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False)  # present, absent, late
    timestamp = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

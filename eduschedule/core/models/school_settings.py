"""Single-row school settings: name and current semester window."""

from sqlalchemy import Column, Date, Integer, String

from eduschedule.db.session import Base

DEFAULT_SCHOOL_NAME = "EduSchedule School"


class SchoolSettings(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    semester_start_date = Column(Date, nullable=False)
    semester_end_date = Column(Date, nullable=False)
    school_name = Column(String(255), nullable=False, default=DEFAULT_SCHOOL_NAME)

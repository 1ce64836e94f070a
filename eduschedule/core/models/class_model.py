"""Classes (e.g. Class 10A). Model named SchoolClass to avoid Python 'class' keyword."""

from sqlalchemy import Column, Integer, String

from eduschedule.db.session import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    grade = Column(String(20), nullable=False)
    section = Column(String(20), nullable=False)
    # Home room; timetable entries may still name a different room
    room_number = Column(String(50), nullable=True)

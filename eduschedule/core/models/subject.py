"""School subjects (e.g. Mathematics, English). Color is used to tint timetable cells."""

from sqlalchemy import Column, Integer, String

from eduschedule.db.session import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    color = Column(String(20), nullable=False)

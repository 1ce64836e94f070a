"""Homework set during a class session."""

from sqlalchemy import Column, Date, ForeignKey, Integer, Text

from eduschedule.db.session import Base


class Homework(Base):
    __tablename__ = "homework"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_session_id = Column(Integer, ForeignKey("class_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    due_date = Column(Date, nullable=False)

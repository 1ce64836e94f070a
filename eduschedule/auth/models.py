from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from eduschedule.db.session import Base


class User(Base):
    """Teacher or administrator account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    password_hash = Column(Text, nullable=False)
    # admin | teacher
    role = Column(String(20), nullable=False, default="teacher")
    # Subject names this teacher can take, e.g. ["Mathematics", "Physics"].
    # Free text, not a foreign key to subjects.
    subjects = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

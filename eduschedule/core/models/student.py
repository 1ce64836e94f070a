from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from eduschedule.db.session import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="RESTRICT"), nullable=False, index=True)
    email = Column(String(255), nullable=True)

    school_class = relationship("SchoolClass", foreign_keys=[class_id])

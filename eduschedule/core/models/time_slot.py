"""Recurring periods of the school day (Period 1, Lunch Break, ...)."""

from sqlalchemy import Column, Integer, String

from eduschedule.db.session import Base


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Fixed-width 24h "HH:MM", so string order is time order
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    label = Column(String(100), nullable=False)

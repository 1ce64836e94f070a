"""
Seed script: default admin account plus starter subjects, classes and time slots.

Run once after the tables exist:
  DEFAULT_ADMIN_EMAIL=admin@yourschool.com
  DEFAULT_ADMIN_PASSWORD=YourSecurePassword
  python -m eduschedule.db.seed

Only empty tables are filled, so re-running is safe.
"""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.models import User
from eduschedule.auth.security import hash_password
from eduschedule.core.config import settings
from eduschedule.core.logging import configure_logging
from eduschedule.core.models import SchoolClass, Subject, TimeSlot
from eduschedule.db.session import AsyncSessionLocal, create_tables

logger = logging.getLogger(__name__)

DEFAULT_SUBJECTS = [
    ("Mathematics", "#FF5733"),
    ("English", "#33FF57"),
    ("Science", "#3357FF"),
    ("History", "#FF33E9"),
    ("Geography", "#33FFF6"),
    ("Physics", "#FFB233"),
]

DEFAULT_CLASSES = [
    ("Class 10A", "10", "A", "101"),
    ("Class 9B", "9", "B", "102"),
    ("Class 11C", "11", "C", "103"),
    ("Class 12A", "12", "A", "104"),
]

DEFAULT_TIME_SLOTS = [
    ("09:00", "10:00", "Period 1"),
    ("10:00", "11:00", "Period 2"),
    ("11:15", "12:15", "Period 3"),
    ("12:15", "13:15", "Lunch Break"),
    ("13:15", "14:15", "Period 4"),
    ("14:15", "15:15", "Period 5"),
    ("15:30", "16:30", "Period 6"),
]


async def _is_empty(db: AsyncSession, model) -> bool:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one() == 0


async def seed(db: AsyncSession) -> None:
    email = settings.default_admin_email
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    if result.scalar_one_or_none() is None:
        db.add(
            User(
                username="admin",
                email=email,
                first_name="Admin",
                last_name="User",
                password_hash=hash_password(settings.default_admin_password),
                role="admin",
                subjects=[],
            )
        )
        logger.info("Created admin user %s", email)

    if await _is_empty(db, Subject):
        db.add_all(Subject(name=name, color=color) for name, color in DEFAULT_SUBJECTS)
        logger.info("Created %d subjects", len(DEFAULT_SUBJECTS))
    if await _is_empty(db, SchoolClass):
        db.add_all(
            SchoolClass(name=name, grade=grade, section=section, room_number=room)
            for name, grade, section, room in DEFAULT_CLASSES
        )
        logger.info("Created %d classes", len(DEFAULT_CLASSES))
    if await _is_empty(db, TimeSlot):
        db.add_all(TimeSlot(start_time=start, end_time=end, label=label) for start, end, label in DEFAULT_TIME_SLOTS)
        logger.info("Created %d time slots", len(DEFAULT_TIME_SLOTS))

    await db.commit()


async def main() -> None:
    configure_logging()
    await create_tables()
    async with AsyncSessionLocal() as db:
        try:
            await seed(db)
        except Exception:
            await db.rollback()
            logger.exception("Seeding failed")
            raise


if __name__ == "__main__":
    asyncio.run(main())

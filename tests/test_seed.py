import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.auth.models import User
from eduschedule.auth.security import verify_password
from eduschedule.core.config import settings
from eduschedule.core.models import SchoolClass, Subject, TimeSlot
from eduschedule.db.seed import DEFAULT_CLASSES, DEFAULT_SUBJECTS, DEFAULT_TIME_SLOTS, seed


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_seed_fills_empty_tables_once(db_session: AsyncSession) -> None:
    await seed(db_session)
    await seed(db_session)

    assert await _count(db_session, User) == 1
    assert await _count(db_session, Subject) == len(DEFAULT_SUBJECTS)
    assert await _count(db_session, SchoolClass) == len(DEFAULT_CLASSES)
    assert await _count(db_session, TimeSlot) == len(DEFAULT_TIME_SLOTS)

    admin = (await db_session.execute(select(User))).scalar_one()
    assert admin.email == settings.default_admin_email
    assert admin.role == "admin"
    assert verify_password(settings.default_admin_password, admin.password_hash)


@pytest.mark.asyncio
async def test_seed_keeps_existing_reference_data(db_session: AsyncSession, school) -> None:
    await seed(db_session)

    assert await _count(db_session, Subject) == 2
    assert await _count(db_session, TimeSlot) == 2

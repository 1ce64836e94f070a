import os

# Settings are read at import time; point them at an in-memory database before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from datetime import date  # noqa: E402
from typing import AsyncGenerator, Dict, List  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import eduschedule.core.models  # noqa: E402,F401
from eduschedule.auth.models import User  # noqa: E402
from eduschedule.auth.security import create_access_token, hash_password  # noqa: E402
from eduschedule.core.models import ClassSession, SchoolClass, Student, Subject, TimeSlot, TimetableEntry  # noqa: E402
from eduschedule.db.session import Base, get_db  # noqa: E402
from eduschedule.main import app  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "secret123"


@pytest.fixture()
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database per test, shared by every session through one connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory

    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data and asserting on it; requests get their own sessions."""
    async with session_factory() as session:
        yield session


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token(user.id, user.role)
    return {"Authorization": f"Bearer {token}"}


async def make_user(
    db: AsyncSession,
    username: str,
    role: str = "teacher",
    first_name: str = "Test",
    last_name: str = "User",
) -> User:
    user = User(
        username=username,
        email=f"{username}@eduschool.com",
        first_name=first_name,
        last_name=last_name,
        password_hash=hash_password(TEST_PASSWORD),
        role=role,
        subjects=[],
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture()
async def admin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "admin", "admin", "Admin", "User")


@pytest.fixture()
async def teacher(db_session: AsyncSession, admin: User) -> User:
    return await make_user(db_session, "jsmith", "teacher", "John", "Smith")


@pytest.fixture()
async def other_teacher(db_session: AsyncSession, teacher: User) -> User:
    return await make_user(db_session, "mjohnson", "teacher", "Mary", "Johnson")


@pytest.fixture()
async def school(db_session: AsyncSession) -> Dict[str, List[int]]:
    """Two subjects, two classes and two time slots, returned as id lists."""
    subjects = [Subject(name="Mathematics", color="#FF5733"), Subject(name="English", color="#33FF57")]
    classes = [
        SchoolClass(name="Class 10A", grade="10", section="A", room_number="101"),
        SchoolClass(name="Class 9B", grade="9", section="B", room_number="102"),
    ]
    slots = [
        TimeSlot(start_time="09:00", end_time="10:00", label="Period 1"),
        TimeSlot(start_time="10:00", end_time="11:00", label="Period 2"),
    ]
    db_session.add_all(subjects + classes + slots)
    await db_session.commit()
    return {
        "subjects": [s.id for s in subjects],
        "classes": [c.id for c in classes],
        "slots": [s.id for s in slots],
    }


@pytest.fixture()
async def students(db_session: AsyncSession, school: Dict[str, List[int]]) -> List[int]:
    rows = [
        Student(first_name="Ada", last_name="Lovelace", class_id=school["classes"][0]),
        Student(first_name="Alan", last_name="Turing", class_id=school["classes"][0]),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return [r.id for r in rows]


@pytest.fixture()
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def admin_client(session_factory: async_sessionmaker, admin: User) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", headers=auth_headers(admin)
    ) as ac:
        yield ac


@pytest.fixture()
async def teacher_client(session_factory: async_sessionmaker, teacher: User) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", headers=auth_headers(teacher)
    ) as ac:
        yield ac


@pytest.fixture()
async def entry_id(db_session: AsyncSession, teacher: User, school: Dict[str, List[int]]) -> int:
    """A Monday, first-period maths lesson for the teacher fixture."""
    entry = TimetableEntry(
        teacher_id=teacher.id,
        class_id=school["classes"][0],
        subject_id=school["subjects"][0],
        time_slot_id=school["slots"][0],
        day_of_week=1,
        room_number="101",
        is_free_period=False,
    )
    db_session.add(entry)
    await db_session.commit()
    return entry.id


@pytest.fixture()
async def class_session_id(db_session: AsyncSession, entry_id: int) -> int:
    session = ClassSession(timetable_entry_id=entry_id, date=date(2024, 9, 2))
    db_session.add(session)
    await db_session.commit()
    return session.id

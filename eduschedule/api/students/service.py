from typing import List

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduschedule.core.exceptions import ServiceError
from eduschedule.core.models import SchoolClass, Student

from .schemas import StudentCreate, StudentResponse


def _to_response(s: Student) -> StudentResponse:
    return StudentResponse(
        id=s.id,
        first_name=s.first_name,
        last_name=s.last_name,
        class_id=s.class_id,
        email=s.email,
    )


async def create_student(db: AsyncSession, payload: StudentCreate) -> StudentResponse:
    if not await db.get(SchoolClass, payload.class_id):
        raise ServiceError("Invalid class", status.HTTP_400_BAD_REQUEST)
    obj = Student(
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        class_id=payload.class_id,
        email=str(payload.email) if payload.email else None,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return _to_response(obj)


async def list_students(db: AsyncSession) -> List[StudentResponse]:
    result = await db.execute(select(Student).order_by(Student.last_name, Student.first_name, Student.id))
    return [_to_response(s) for s in result.scalars().all()]


async def list_students_by_class(db: AsyncSession, class_id: int) -> List[StudentResponse]:
    result = await db.execute(
        select(Student).where(Student.class_id == class_id).order_by(Student.last_name, Student.first_name, Student.id)
    )
    return [_to_response(s) for s in result.scalars().all()]

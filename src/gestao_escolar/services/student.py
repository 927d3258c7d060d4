"""Student business logic.

Every student owns a profile with role ``aluno``. Create and delete touch
both rows inside the request transaction, so a failure on the second write
rolls back the first and no orphan profile is left behind.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import NotFoundError
from gestao_escolar.logging import get_logger
from gestao_escolar.models import Profile, School, SchoolClass, Student
from gestao_escolar.repositories.records import assign_and_save, remove, save
from gestao_escolar.repositories.student import get_student, list_students
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams
from gestao_escolar.schemas.student import StudentCreate, StudentUpdate
from gestao_escolar.services.common import check_references, check_same_school

logger = get_logger(__name__)

_REFERENCES = {"school_id": School, "class_id": SchoolClass, "guardian_profile_id": Profile}


async def get_students(db: AsyncSession, params: QueryParams) -> Paginated[Student]:
    return await list_students(db, params)


async def find_student(db: AsyncSession, student_id: int) -> Student | None:
    return await get_student(db, student_id)


async def _existing(db: AsyncSession, student_id: int) -> Student:
    student = await get_student(db, student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return student


async def create_student(db: AsyncSession, payload: StudentCreate) -> Student:
    values = payload.model_dump()
    await check_references(db, values, _REFERENCES)
    await check_same_school(db, SchoolClass, values["class_id"], values["school_id"], "class_id")
    full_name = values.pop("full_name")

    profile = await save(db, Profile(full_name=full_name, role="aluno", school_id=values["school_id"]))
    student = await save(db, Student(**values, profile_id=profile.id))
    logger.info(
        "student_created",
        student_id=student.id,
        school_id=student.school_id,
        registration_number=student.registration_number,
    )
    return await _existing(db, student.id)


async def update_student(db: AsyncSession, student_id: int, payload: StudentUpdate) -> Student:
    student = await _existing(db, student_id)
    values = payload.changes("full_name", "registration_number", "school_id", "status")
    await check_references(db, values, _REFERENCES)
    if "class_id" in values or "school_id" in values:
        await check_same_school(
            db,
            SchoolClass,
            values.get("class_id", student.class_id),
            values.get("school_id", student.school_id),
            "class_id",
        )

    profile_values: dict[str, Any] = {}
    if "full_name" in values:
        profile_values["full_name"] = values.pop("full_name")
    if "school_id" in values:
        profile_values["school_id"] = values["school_id"]
    if profile_values:
        await assign_and_save(db, student.profile, profile_values)

    await assign_and_save(db, student, values)
    logger.info("student_updated", student_id=student_id, fields=sorted({*values, *profile_values}))
    return await _existing(db, student_id)


async def delete_student(db: AsyncSession, student_id: int) -> None:
    """Delete the student and then its profile."""
    student = await _existing(db, student_id)
    profile = student.profile
    profile_id = profile.id
    await remove(db, student)
    await remove(db, profile)
    logger.info("student_deleted", student_id=student_id, profile_id=str(profile_id))

"""Teacher business logic.

Teachers own a profile with role ``professor``, created and removed
together with the teacher row.
"""

from typing import Any

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import NotFoundError, backend_errors
from gestao_escolar.logging import get_logger
from gestao_escolar.models import Profile, School, SchoolClass, Teacher
from gestao_escolar.repositories.records import assign_and_save, remove, save
from gestao_escolar.repositories.teacher import get_teacher, list_teachers
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams
from gestao_escolar.schemas.teacher import TeacherCreate, TeacherUpdate
from gestao_escolar.services.common import check_references

logger = get_logger(__name__)

_REFERENCES = {"school_id": School}


async def get_teachers(db: AsyncSession, params: QueryParams) -> Paginated[Teacher]:
    return await list_teachers(db, params)


async def find_teacher(db: AsyncSession, teacher_id: int) -> Teacher | None:
    return await get_teacher(db, teacher_id)


async def _existing(db: AsyncSession, teacher_id: int) -> Teacher:
    teacher = await get_teacher(db, teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher", teacher_id)
    return teacher


async def create_teacher(db: AsyncSession, payload: TeacherCreate) -> Teacher:
    values = payload.model_dump()
    await check_references(db, values, _REFERENCES)
    full_name = values.pop("full_name")

    profile = await save(db, Profile(full_name=full_name, role="professor", school_id=values["school_id"]))
    teacher = await save(db, Teacher(**values, profile_id=profile.id))
    logger.info("teacher_created", teacher_id=teacher.id, school_id=teacher.school_id)
    return await _existing(db, teacher.id)


async def update_teacher(db: AsyncSession, teacher_id: int, payload: TeacherUpdate) -> Teacher:
    teacher = await _existing(db, teacher_id)
    values = payload.changes("full_name", "school_id", "is_active")
    await check_references(db, values, _REFERENCES)

    profile_values: dict[str, Any] = {}
    if "full_name" in values:
        profile_values["full_name"] = values.pop("full_name")
    if "school_id" in values:
        profile_values["school_id"] = values["school_id"]
    if profile_values:
        await assign_and_save(db, teacher.profile, profile_values)

    await assign_and_save(db, teacher, values)
    logger.info("teacher_updated", teacher_id=teacher_id, fields=sorted({*values, *profile_values}))
    return await _existing(db, teacher_id)


async def delete_teacher(db: AsyncSession, teacher_id: int) -> None:
    """Unassign the teacher from its classes, then delete it and its profile."""
    teacher = await _existing(db, teacher_id)
    profile = teacher.profile
    with backend_errors():
        await db.execute(
            update(SchoolClass).where(SchoolClass.teacher_id == teacher_id).values(teacher_id=None)
        )
    await remove(db, teacher)
    await remove(db, profile)
    logger.info("teacher_deleted", teacher_id=teacher_id)

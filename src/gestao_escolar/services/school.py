"""School business logic.

Orchestrates repository calls for the school screens: list, detail, form
create/update, delete, and the per-school student/teacher/class tabs.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import ConflictError, NotFoundError, backend_errors
from gestao_escolar.logging import get_logger
from gestao_escolar.models import Profile, School, SchoolClass, Student, Teacher
from gestao_escolar.repositories.query import count_rows
from gestao_escolar.repositories.records import assign_and_save, remove, save
from gestao_escolar.repositories.school import get_school, list_schools
from gestao_escolar.repositories.school_class import list_classes
from gestao_escolar.repositories.student import list_students
from gestao_escolar.repositories.teacher import list_teachers
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import Filter, Operator, QueryParams
from gestao_escolar.schemas.school import SchoolCreate, SchoolUpdate
from gestao_escolar.services.common import check_references

logger = get_logger(__name__)

_REFERENCES = {"director_profile_id": Profile}


async def get_schools(db: AsyncSession, params: QueryParams) -> Paginated[School]:
    return await list_schools(db, params)


async def find_school(db: AsyncSession, school_id: int) -> School | None:
    return await get_school(db, school_id)


async def _existing(db: AsyncSession, school_id: int) -> School:
    school = await get_school(db, school_id)
    if school is None:
        raise NotFoundError("School", school_id)
    return school


async def create_school(db: AsyncSession, payload: SchoolCreate) -> School:
    values = payload.model_dump()
    await check_references(db, values, _REFERENCES)
    school = await save(db, School(**values))
    logger.info("school_created", school_id=school.id, name=school.name)
    return await _existing(db, school.id)


async def update_school(db: AsyncSession, school_id: int, payload: SchoolUpdate) -> School:
    school = await _existing(db, school_id)
    values = payload.changes("name")
    await check_references(db, values, _REFERENCES)
    await assign_and_save(db, school, values)
    logger.info("school_updated", school_id=school_id, fields=sorted(values))
    return await _existing(db, school_id)


async def delete_school(db: AsyncSession, school_id: int) -> None:
    """Delete a school that no longer has students, teachers or classes."""
    school = await _existing(db, school_id)
    in_school = (Filter("school_id", Operator.EQ, school_id),)
    for model in (Student, Teacher, SchoolClass):
        if await count_rows(db, model, in_school):
            raise ConflictError(f"School {school_id} still has {model.__tablename__}")
    with backend_errors():
        await db.execute(update(Profile).where(Profile.school_id == school_id).values(school_id=None))
    await remove(db, school)
    logger.info("school_deleted", school_id=school_id)


async def get_school_students(db: AsyncSession, school_id: int, params: QueryParams) -> Paginated[Student]:
    await _existing(db, school_id)
    return await list_students(db, params, school_id=school_id)


async def get_school_teachers(db: AsyncSession, school_id: int, params: QueryParams) -> Paginated[Teacher]:
    await _existing(db, school_id)
    return await list_teachers(db, params, school_id=school_id)


async def get_school_classes(db: AsyncSession, school_id: int, params: QueryParams) -> Paginated[SchoolClass]:
    await _existing(db, school_id)
    return await list_classes(db, params, school_id=school_id)

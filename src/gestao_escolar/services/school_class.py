"""Class (turma) business logic."""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import NotFoundError, backend_errors
from gestao_escolar.logging import get_logger
from gestao_escolar.models import School, SchoolClass, Student, Teacher
from gestao_escolar.repositories.records import assign_and_save, remove, save
from gestao_escolar.repositories.school_class import get_class, list_classes
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams
from gestao_escolar.schemas.school_class import ClassCreate, ClassUpdate
from gestao_escolar.services.common import check_references, check_same_school

logger = get_logger(__name__)

_REFERENCES = {"school_id": School, "teacher_id": Teacher}


async def get_classes(db: AsyncSession, params: QueryParams) -> Paginated[SchoolClass]:
    return await list_classes(db, params)


async def find_class(db: AsyncSession, class_id: int) -> SchoolClass | None:
    return await get_class(db, class_id)


async def _existing(db: AsyncSession, class_id: int) -> SchoolClass:
    school_class = await get_class(db, class_id)
    if school_class is None:
        raise NotFoundError("Class", class_id)
    return school_class


async def create_class(db: AsyncSession, payload: ClassCreate) -> SchoolClass:
    values = payload.model_dump()
    await check_references(db, values, _REFERENCES)
    await check_same_school(db, Teacher, values["teacher_id"], values["school_id"], "teacher_id")
    school_class = await save(db, SchoolClass(**values))
    logger.info("class_created", class_id=school_class.id, school_id=school_class.school_id, year=school_class.year)
    return await _existing(db, school_class.id)


async def update_class(db: AsyncSession, class_id: int, payload: ClassUpdate) -> SchoolClass:
    school_class = await _existing(db, class_id)
    values = payload.changes("name", "grade", "level", "year", "school_id", "period", "is_active")
    await check_references(db, values, _REFERENCES)
    if "teacher_id" in values or "school_id" in values:
        await check_same_school(
            db,
            Teacher,
            values.get("teacher_id", school_class.teacher_id),
            values.get("school_id", school_class.school_id),
            "teacher_id",
        )
    await assign_and_save(db, school_class, values)
    logger.info("class_updated", class_id=class_id, fields=sorted(values))
    return await _existing(db, class_id)


async def delete_class(db: AsyncSession, class_id: int) -> None:
    """Detach enrolled students from the class, then delete it."""
    school_class = await _existing(db, class_id)
    with backend_errors():
        await db.execute(update(Student).where(Student.class_id == class_id).values(class_id=None))
    await remove(db, school_class)
    logger.info("class_deleted", class_id=class_id)

"""Student data-access layer."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gestao_escolar.models import Student
from gestao_escolar.repositories.query import fetch_one, fetch_page
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams, Sort, SortDirection

# Most recent enrolments first.
DEFAULT_SORT = (Sort("created_at", SortDirection.DESC), Sort("id", SortDirection.DESC))

_RELATED = (
    selectinload(Student.profile),
    selectinload(Student.school),
    selectinload(Student.school_class),
)


async def list_students(
    db: AsyncSession, params: QueryParams, *, school_id: int | None = None
) -> Paginated[Student]:
    """Return a page of students with profile, school and class loaded.

    ``school_id`` scopes the listing to one school before any filter applies.
    """
    base = select(Student)
    if school_id is not None:
        base = base.where(Student.school_id == school_id)
    return await fetch_page(db, base, Student, params, default_sort=DEFAULT_SORT, options=_RELATED)


async def get_student(db: AsyncSession, student_id: int) -> Student | None:
    stmt = select(Student).options(*_RELATED).where(Student.id == student_id)
    return await fetch_one(db, stmt)

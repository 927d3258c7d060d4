"""Class (turma) data-access layer."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gestao_escolar.models import SchoolClass, Teacher
from gestao_escolar.repositories.query import fetch_one, fetch_page
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams, Sort, SortDirection

# Current academic year first, then by class name.
DEFAULT_SORT = (
    Sort("year", SortDirection.DESC),
    Sort("name", SortDirection.ASC),
    Sort("id", SortDirection.ASC),
)

_RELATED = (
    selectinload(SchoolClass.school),
    selectinload(SchoolClass.teacher).selectinload(Teacher.profile),
)


async def list_classes(
    db: AsyncSession, params: QueryParams, *, school_id: int | None = None
) -> Paginated[SchoolClass]:
    base = select(SchoolClass)
    if school_id is not None:
        base = base.where(SchoolClass.school_id == school_id)
    return await fetch_page(db, base, SchoolClass, params, default_sort=DEFAULT_SORT, options=_RELATED)


async def get_class(db: AsyncSession, class_id: int) -> SchoolClass | None:
    stmt = select(SchoolClass).options(*_RELATED).where(SchoolClass.id == class_id)
    return await fetch_one(db, stmt)

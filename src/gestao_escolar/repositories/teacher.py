"""Teacher data-access layer."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gestao_escolar.models import Teacher
from gestao_escolar.repositories.query import fetch_one, fetch_page
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams, Sort, SortDirection

DEFAULT_SORT = (Sort("created_at", SortDirection.DESC), Sort("id", SortDirection.DESC))

_RELATED = (selectinload(Teacher.profile), selectinload(Teacher.school))


async def list_teachers(
    db: AsyncSession, params: QueryParams, *, school_id: int | None = None
) -> Paginated[Teacher]:
    base = select(Teacher)
    if school_id is not None:
        base = base.where(Teacher.school_id == school_id)
    return await fetch_page(db, base, Teacher, params, default_sort=DEFAULT_SORT, options=_RELATED)


async def get_teacher(db: AsyncSession, teacher_id: int) -> Teacher | None:
    stmt = select(Teacher).options(*_RELATED).where(Teacher.id == teacher_id)
    return await fetch_one(db, stmt)

"""School data-access layer.

Query functions only; business rules live in services.school.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gestao_escolar.models import School
from gestao_escolar.repositories.query import fetch_one, fetch_page
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams, Sort, SortDirection

# Schools are listed alphabetically unless the caller sorts.
DEFAULT_SORT = (Sort("name", SortDirection.ASC), Sort("id", SortDirection.ASC))


async def list_schools(db: AsyncSession, params: QueryParams) -> Paginated[School]:
    """Return a page of schools with their director profile loaded."""
    return await fetch_page(
        db,
        select(School),
        School,
        params,
        default_sort=DEFAULT_SORT,
        options=[selectinload(School.director)],
    )


async def get_school(db: AsyncSession, school_id: int) -> School | None:
    stmt = select(School).options(selectinload(School.director)).where(School.id == school_id)
    return await fetch_one(db, stmt)

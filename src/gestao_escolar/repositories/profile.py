"""Profile data-access layer."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.models import Profile
from gestao_escolar.repositories.query import fetch_one, fetch_page
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams, Sort, SortDirection

DEFAULT_SORT = (Sort("full_name", SortDirection.ASC), Sort("id", SortDirection.ASC))


async def list_profiles(db: AsyncSession, params: QueryParams) -> Paginated[Profile]:
    return await fetch_page(db, select(Profile), Profile, params, default_sort=DEFAULT_SORT)


async def get_profile(db: AsyncSession, profile_id: uuid.UUID) -> Profile | None:
    return await fetch_one(db, select(Profile).where(Profile.id == profile_id))

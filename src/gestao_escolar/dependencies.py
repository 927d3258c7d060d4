"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from typing import Annotated

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.config import settings
from gestao_escolar.db.session import get_db
from gestao_escolar.models import Profile
from gestao_escolar.schemas.query import Pagination, QueryParams
from gestao_escolar.services.profile import resolve_session_profile

PROFILE_HEADER = "X-Profile-ID"

DB = Annotated[AsyncSession, Depends(get_db)]


async def get_current_profile(
    db: DB,
    profile_id: Annotated[str | None, Header(alias=PROFILE_HEADER)] = None,
) -> Profile:
    """Session handle for the request, passed explicitly to handlers."""
    return await resolve_session_profile(db, profile_id)


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


def page_params(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> QueryParams:
    """``?page=&page_size=`` for the plain GET list endpoints; default sort applies."""
    return QueryParams(pagination=Pagination(page=page, page_size=page_size))


PageParams = Annotated[QueryParams, Depends(page_params)]

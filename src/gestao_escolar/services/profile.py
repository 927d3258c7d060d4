"""Profile lookups, including resolving the session profile of a request."""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.exceptions import UnauthorizedError
from gestao_escolar.logging import get_logger
from gestao_escolar.models import Profile
from gestao_escolar.repositories.profile import get_profile, list_profiles
from gestao_escolar.schemas.pagination import Paginated
from gestao_escolar.schemas.query import QueryParams

logger = get_logger(__name__)


async def get_profiles(db: AsyncSession, params: QueryParams) -> Paginated[Profile]:
    return await list_profiles(db, params)


async def resolve_session_profile(db: AsyncSession, raw_profile_id: str | None) -> Profile:
    """Turn the session handle sent by the client into a Profile.

    The hosted auth service has already verified the user; this only checks
    that the id is well formed and that a profile exists for it.
    """
    if not raw_profile_id:
        raise UnauthorizedError("Missing session profile")
    try:
        profile_id = uuid.UUID(raw_profile_id)
    except ValueError:
        raise UnauthorizedError("Malformed session profile") from None

    profile = await get_profile(db, profile_id)
    if profile is None:
        logger.warning("unknown_session_profile", profile_id=raw_profile_id)
        raise UnauthorizedError("Unknown session profile")

    structlog.contextvars.bind_contextvars(profile_id=str(profile.id), role=profile.role)
    return profile

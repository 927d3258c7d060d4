"""Session profile and profile lookup endpoints."""

from fastapi import APIRouter

from gestao_escolar.dependencies import DB, CurrentProfile
from gestao_escolar.schemas.profile import ProfileListResponse, ProfileResponse
from gestao_escolar.schemas.query import QueryRequest
from gestao_escolar.services.profile import get_profiles

router = APIRouter(tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
async def read_me(profile: CurrentProfile) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)


@router.post("/profiles/query", response_model=ProfileListResponse)
async def query_profiles(db: DB, body: QueryRequest) -> ProfileListResponse:
    """Filter profiles, e.g. ``role eq diretor_escola`` for the director picker."""
    return ProfileListResponse.model_validate(await get_profiles(db, body.to_params()))

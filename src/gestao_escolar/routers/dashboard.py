"""Dashboard endpoints."""

from fastapi import APIRouter

from gestao_escolar.dependencies import DB, CurrentProfile
from gestao_escolar.schemas.dashboard import DashboardStats
from gestao_escolar.services.dashboard import get_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: DB, profile: CurrentProfile) -> DashboardStats:
    """Counts for the dashboard tiles, scoped by the caller's role."""
    return await get_stats(db, profile)

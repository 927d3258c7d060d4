"""Dashboard aggregates.

What a profile sees depends on its role: the municipal administrator counts
everything, a school director counts rows of their own school, everyone
else gets zeros.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from gestao_escolar.logging import get_logger
from gestao_escolar.models import Profile, School, SchoolClass, Student, Teacher
from gestao_escolar.repositories.query import count_rows
from gestao_escolar.schemas.dashboard import DashboardStats
from gestao_escolar.schemas.query import Filter, Operator

logger = get_logger(__name__)


async def get_stats(db: AsyncSession, profile: Profile) -> DashboardStats:
    if profile.role == "admin_municipal":
        return DashboardStats(
            scope="municipality",
            schools=await count_rows(db, School),
            students=await count_rows(db, Student),
            teachers=await count_rows(db, Teacher),
            classes=await count_rows(db, SchoolClass),
        )

    if profile.role == "diretor_escola" and profile.school_id is not None:
        in_school = (Filter("school_id", Operator.EQ, profile.school_id),)
        return DashboardStats(
            scope="school",
            schools=1,
            students=await count_rows(db, Student, in_school),
            teachers=await count_rows(db, Teacher, in_school),
            classes=await count_rows(db, SchoolClass, in_school),
        )

    logger.debug("dashboard_without_scope", role=profile.role)
    return DashboardStats(scope="none", schools=0, students=0, teachers=0, classes=0)

"""Profile response schemas."""

import uuid
from datetime import datetime

from gestao_escolar.models import UserRole
from gestao_escolar.schemas.base import OutputModel
from gestao_escolar.schemas.pagination import PaginatedResponse


class ProfileSummary(OutputModel):
    """Profile nested inside schools, students and teachers."""

    id: uuid.UUID
    full_name: str | None
    role: UserRole
    avatar_url: str | None


class ProfileResponse(ProfileSummary):
    cpf: str | None
    school_id: int | None
    created_at: datetime
    updated_at: datetime


ProfileListResponse = PaginatedResponse[ProfileResponse]

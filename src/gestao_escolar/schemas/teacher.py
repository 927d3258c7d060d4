"""Teacher request and response schemas."""

import uuid
from datetime import datetime

from pydantic import Field

from gestao_escolar.schemas.base import InputModel, OutputModel
from gestao_escolar.schemas.pagination import PaginatedResponse
from gestao_escolar.schemas.profile import ProfileSummary
from gestao_escolar.schemas.school import SchoolSummary


class TeacherCreate(InputModel):
    full_name: str = Field(min_length=3, max_length=200)
    registration_number: str | None = Field(None, max_length=30)
    specialization: str | None = Field(None, max_length=120)
    education_level: str | None = Field(None, max_length=120)
    school_id: int
    is_active: bool = True


class TeacherUpdate(InputModel):
    full_name: str | None = Field(None, min_length=3, max_length=200)
    registration_number: str | None = Field(None, max_length=30)
    specialization: str | None = Field(None, max_length=120)
    education_level: str | None = Field(None, max_length=120)
    school_id: int | None = None
    is_active: bool | None = None


class TeacherSummary(OutputModel):
    id: int
    registration_number: str | None
    profile: ProfileSummary


class TeacherResponse(OutputModel):
    id: int
    profile_id: uuid.UUID
    registration_number: str | None
    specialization: str | None
    education_level: str | None
    school_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    profile: ProfileSummary
    school: SchoolSummary


TeacherListResponse = PaginatedResponse[TeacherResponse]

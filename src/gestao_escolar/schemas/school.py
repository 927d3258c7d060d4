"""School request and response schemas.

Validation mirrors the school form: only the name is required and it must
have at least three characters.
"""

import uuid
from datetime import datetime

from pydantic import EmailStr, Field

from gestao_escolar.schemas.base import InputModel, OutputModel
from gestao_escolar.schemas.pagination import PaginatedResponse
from gestao_escolar.schemas.profile import ProfileSummary


class SchoolCreate(InputModel):
    name: str = Field(min_length=3, max_length=200)
    inep_code: str | None = Field(None, pattern=r"^\d{8}$")
    address: str | None = Field(None, max_length=300)
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    director_profile_id: uuid.UUID | None = None


class SchoolUpdate(InputModel):
    name: str | None = Field(None, min_length=3, max_length=200)
    inep_code: str | None = Field(None, pattern=r"^\d{8}$")
    address: str | None = Field(None, max_length=300)
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    director_profile_id: uuid.UUID | None = None


class SchoolSummary(OutputModel):
    id: int
    name: str


class SchoolResponse(OutputModel):
    id: int
    name: str
    inep_code: str | None
    address: str | None
    phone: str | None
    email: str | None
    director_profile_id: uuid.UUID | None
    director: ProfileSummary | None
    created_at: datetime
    updated_at: datetime


SchoolListResponse = PaginatedResponse[SchoolResponse]

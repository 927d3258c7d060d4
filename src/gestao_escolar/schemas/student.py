"""Student request and response schemas.

A student is created together with its profile, so the create payload
carries ``full_name`` instead of a ``profile_id``.
"""

import uuid
from datetime import date, datetime

from pydantic import EmailStr, Field

from gestao_escolar.models import Gender, StudentStatus
from gestao_escolar.schemas.base import InputModel, OutputModel
from gestao_escolar.schemas.pagination import PaginatedResponse
from gestao_escolar.schemas.profile import ProfileSummary
from gestao_escolar.schemas.school import SchoolSummary


class StudentCreate(InputModel):
    full_name: str = Field(min_length=3, max_length=200)
    registration_number: str = Field(min_length=1, max_length=30)
    birth_date: date | None = None
    gender: Gender | None = None
    address: str | None = Field(None, max_length=300)
    guardian_name: str | None = Field(None, max_length=200)
    guardian_phone: str | None = Field(None, max_length=30)
    guardian_email: EmailStr | None = None
    guardian_profile_id: uuid.UUID | None = None
    school_id: int
    class_id: int | None = None
    status: StudentStatus = "ativo"


class StudentUpdate(InputModel):
    full_name: str | None = Field(None, min_length=3, max_length=200)
    registration_number: str | None = Field(None, min_length=1, max_length=30)
    birth_date: date | None = None
    gender: Gender | None = None
    address: str | None = Field(None, max_length=300)
    guardian_name: str | None = Field(None, max_length=200)
    guardian_phone: str | None = Field(None, max_length=30)
    guardian_email: EmailStr | None = None
    guardian_profile_id: uuid.UUID | None = None
    school_id: int | None = None
    class_id: int | None = None
    status: StudentStatus | None = None


class ClassInStudent(OutputModel):
    id: int
    name: str
    grade: str


class StudentResponse(OutputModel):
    id: int
    profile_id: uuid.UUID
    registration_number: str
    birth_date: date | None
    gender: Gender | None
    address: str | None
    guardian_name: str | None
    guardian_phone: str | None
    guardian_email: str | None
    guardian_profile_id: uuid.UUID | None
    school_id: int
    class_id: int | None
    status: StudentStatus
    created_at: datetime
    updated_at: datetime
    profile: ProfileSummary
    school: SchoolSummary
    school_class: ClassInStudent | None


StudentListResponse = PaginatedResponse[StudentResponse]

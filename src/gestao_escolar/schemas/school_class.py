"""Class (turma) request and response schemas."""

from datetime import datetime

from pydantic import Field

from gestao_escolar.models import ClassLevel, ClassPeriod
from gestao_escolar.schemas.base import InputModel, OutputModel
from gestao_escolar.schemas.pagination import PaginatedResponse
from gestao_escolar.schemas.school import SchoolSummary
from gestao_escolar.schemas.teacher import TeacherSummary


class ClassCreate(InputModel):
    name: str = Field(min_length=1, max_length=100)
    grade: str = Field(min_length=1, max_length=50, description='e.g. "1º Ano"')
    level: ClassLevel
    year: int = Field(ge=2000, le=2100)
    school_id: int
    teacher_id: int | None = None
    room: str | None = Field(None, max_length=50)
    period: ClassPeriod
    is_active: bool = True


class ClassUpdate(InputModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    grade: str | None = Field(None, min_length=1, max_length=50)
    level: ClassLevel | None = None
    year: int | None = Field(None, ge=2000, le=2100)
    school_id: int | None = None
    teacher_id: int | None = None
    room: str | None = Field(None, max_length=50)
    period: ClassPeriod | None = None
    is_active: bool | None = None


class ClassResponse(OutputModel):
    id: int
    name: str
    grade: str
    level: ClassLevel
    year: int
    school_id: int
    teacher_id: int | None
    room: str | None
    period: ClassPeriod
    is_active: bool
    created_at: datetime
    updated_at: datetime
    school: SchoolSummary
    teacher: TeacherSummary | None


ClassListResponse = PaginatedResponse[ClassResponse]

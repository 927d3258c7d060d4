"""SQLAlchemy models.

Define all ORM models here. They must inherit from Base so that
Alembic's autogenerate can detect them.

Enum-like columns are plain strings guarded by check constraints; the
allowed values are Literal aliases shared with the request schemas.
"""

import uuid
from datetime import date, datetime
from typing import Literal, get_args

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gestao_escolar.db.session import Base  # noqa: F401 — re-exported for convenience

UserRole = Literal[
    "admin_municipal",
    "diretor_escola",
    "secretario_escola",
    "professor",
    "aluno",
    "responsavel",
]
StudentStatus = Literal["ativo", "inativo", "transferido", "formado"]
Gender = Literal["masculino", "feminino", "outro"]
ClassLevel = Literal["infantil", "fundamental_i", "fundamental_ii", "medio", "eja"]
ClassPeriod = Literal["matutino", "vespertino", "noturno", "integral"]

USER_ROLES: tuple[str, ...] = get_args(UserRole)
STUDENT_STATUSES: tuple[str, ...] = get_args(StudentStatus)
GENDERS: tuple[str, ...] = get_args(Gender)
CLASS_LEVELS: tuple[str, ...] = get_args(ClassLevel)
CLASS_PERIODS: tuple[str, ...] = get_args(ClassPeriod)


def _one_of(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Profile(TimestampMixin, Base):
    """Application-side profile of an authenticated user."""

    __tablename__ = "profiles"
    __table_args__ = (CheckConstraint(_one_of("role", USER_ROLES), name="role_valid"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name: Mapped[str | None] = mapped_column(String(200))
    cpf: Mapped[str | None] = mapped_column(String(14), unique=True)
    role: Mapped[str] = mapped_column(String(30))
    avatar_url: Mapped[str | None] = mapped_column(String(500))
    school_id: Mapped[int | None] = mapped_column(ForeignKey("schools.id"), index=True)


class School(TimestampMixin, Base):
    __tablename__ = "schools"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    inep_code: Mapped[str | None] = mapped_column(String(8), unique=True)
    address: Mapped[str | None] = mapped_column(String(300))
    phone: Mapped[str | None] = mapped_column(String(30))
    email: Mapped[str | None] = mapped_column(String(200))
    director_profile_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("profiles.id", use_alter=True, name="fk_schools_director_profile_id_profiles")
    )

    director: Mapped["Profile | None"] = relationship(foreign_keys=[director_profile_id])
    teachers: Mapped[list["Teacher"]] = relationship(back_populates="school")
    students: Mapped[list["Student"]] = relationship(back_populates="school")
    classes: Mapped[list["SchoolClass"]] = relationship(back_populates="school")


class Teacher(TimestampMixin, Base):
    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(primary_key=True)
    profile_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"), index=True)
    registration_number: Mapped[str | None] = mapped_column(String(30), unique=True)
    specialization: Mapped[str | None] = mapped_column(String(120))
    education_level: Mapped[str | None] = mapped_column(String(120))
    school_id: Mapped[int] = mapped_column(ForeignKey("schools.id"), index=True)
    is_active: Mapped[bool] = mapped_column(default=True)

    profile: Mapped["Profile"] = relationship()
    school: Mapped["School"] = relationship(back_populates="teachers")


class SchoolClass(TimestampMixin, Base):
    """A class (turma) offered by a school in a given academic year."""

    __tablename__ = "classes"
    __table_args__ = (
        CheckConstraint(_one_of("level", CLASS_LEVELS), name="level_valid"),
        CheckConstraint(_one_of("period", CLASS_PERIODS), name="period_valid"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    grade: Mapped[str] = mapped_column(String(50))
    level: Mapped[str] = mapped_column(String(20))
    year: Mapped[int]
    school_id: Mapped[int] = mapped_column(ForeignKey("schools.id"), index=True)
    teacher_id: Mapped[int | None] = mapped_column(ForeignKey("teachers.id"), index=True)
    room: Mapped[str | None] = mapped_column(String(50))
    period: Mapped[str] = mapped_column(String(20))
    is_active: Mapped[bool] = mapped_column(default=True)

    school: Mapped["School"] = relationship(back_populates="classes")
    teacher: Mapped["Teacher | None"] = relationship()


class Student(TimestampMixin, Base):
    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint(_one_of("status", STUDENT_STATUSES), name="status_valid"),
        CheckConstraint(f"gender IS NULL OR {_one_of('gender', GENDERS)}", name="gender_valid"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    profile_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"), index=True)
    registration_number: Mapped[str] = mapped_column(String(30), unique=True)
    birth_date: Mapped[date | None]
    gender: Mapped[str | None] = mapped_column(String(10))
    address: Mapped[str | None] = mapped_column(String(300))
    guardian_name: Mapped[str | None] = mapped_column(String(200))
    guardian_phone: Mapped[str | None] = mapped_column(String(30))
    guardian_email: Mapped[str | None] = mapped_column(String(200))
    guardian_profile_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("profiles.id"))
    school_id: Mapped[int] = mapped_column(ForeignKey("schools.id"), index=True)
    class_id: Mapped[int | None] = mapped_column(ForeignKey("classes.id"), index=True)
    status: Mapped[str] = mapped_column(String(20), default="ativo")

    profile: Mapped["Profile"] = relationship(foreign_keys=[profile_id])
    school: Mapped["School"] = relationship(back_populates="students")
    school_class: Mapped["SchoolClass | None"] = relationship()

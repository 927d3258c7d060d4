"""initial schema: profiles, schools, teachers, classes, students

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column("cpf", sa.String(14), nullable=True),
        sa.Column("role", sa.String(30), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("school_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('admin_municipal', 'diretor_escola', 'secretario_escola', "
            "'professor', 'aluno', 'responsavel')",
            name=op.f("ck_profiles_role_valid"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_profiles")),
        sa.UniqueConstraint("cpf", name=op.f("uq_profiles_cpf")),
    )
    op.create_index(op.f("ix_profiles_school_id"), "profiles", ["school_id"])

    op.create_table(
        "schools",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("inep_code", sa.String(8), nullable=True),
        sa.Column("address", sa.String(300), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("director_profile_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["director_profile_id"], ["profiles.id"], name="fk_schools_director_profile_id_profiles"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_schools")),
        sa.UniqueConstraint("inep_code", name=op.f("uq_schools_inep_code")),
    )
    # profiles and schools reference each other; batch mode keeps this valid on SQLite
    with op.batch_alter_table("profiles") as batch:
        batch.create_foreign_key(op.f("fk_profiles_school_id_schools"), "schools", ["school_id"], ["id"])

    op.create_table(
        "teachers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("registration_number", sa.String(30), nullable=True),
        sa.Column("specialization", sa.String(120), nullable=True),
        sa.Column("education_level", sa.String(120), nullable=True),
        sa.Column("school_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], name=op.f("fk_teachers_profile_id_profiles")),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], name=op.f("fk_teachers_school_id_schools")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_teachers")),
        sa.UniqueConstraint("registration_number", name=op.f("uq_teachers_registration_number")),
    )
    op.create_index(op.f("ix_teachers_profile_id"), "teachers", ["profile_id"])
    op.create_index(op.f("ix_teachers_school_id"), "teachers", ["school_id"])

    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("grade", sa.String(50), nullable=False),
        sa.Column("level", sa.String(20), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("school_id", sa.Integer(), nullable=False),
        sa.Column("teacher_id", sa.Integer(), nullable=True),
        sa.Column("room", sa.String(50), nullable=True),
        sa.Column("period", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "level IN ('infantil', 'fundamental_i', 'fundamental_ii', 'medio', 'eja')",
            name=op.f("ck_classes_level_valid"),
        ),
        sa.CheckConstraint(
            "period IN ('matutino', 'vespertino', 'noturno', 'integral')",
            name=op.f("ck_classes_period_valid"),
        ),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], name=op.f("fk_classes_school_id_schools")),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], name=op.f("fk_classes_teacher_id_teachers")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_classes")),
    )
    op.create_index(op.f("ix_classes_school_id"), "classes", ["school_id"])
    op.create_index(op.f("ix_classes_teacher_id"), "classes", ["teacher_id"])

    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("registration_number", sa.String(30), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(10), nullable=True),
        sa.Column("address", sa.String(300), nullable=True),
        sa.Column("guardian_name", sa.String(200), nullable=True),
        sa.Column("guardian_phone", sa.String(30), nullable=True),
        sa.Column("guardian_email", sa.String(200), nullable=True),
        sa.Column("guardian_profile_id", sa.Uuid(), nullable=True),
        sa.Column("school_id", sa.Integer(), nullable=False),
        sa.Column("class_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('ativo', 'inativo', 'transferido', 'formado')",
            name=op.f("ck_students_status_valid"),
        ),
        sa.CheckConstraint(
            "gender IS NULL OR gender IN ('masculino', 'feminino', 'outro')",
            name=op.f("ck_students_gender_valid"),
        ),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], name=op.f("fk_students_profile_id_profiles")),
        sa.ForeignKeyConstraint(
            ["guardian_profile_id"], ["profiles.id"], name=op.f("fk_students_guardian_profile_id_profiles")
        ),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], name=op.f("fk_students_school_id_schools")),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], name=op.f("fk_students_class_id_classes")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_students")),
        sa.UniqueConstraint("registration_number", name=op.f("uq_students_registration_number")),
    )
    op.create_index(op.f("ix_students_profile_id"), "students", ["profile_id"])
    op.create_index(op.f("ix_students_school_id"), "students", ["school_id"])
    op.create_index(op.f("ix_students_class_id"), "students", ["class_id"])


def downgrade() -> None:
    op.drop_table("students")
    op.drop_table("classes")
    op.drop_table("teachers")
    with op.batch_alter_table("profiles") as batch:
        batch.drop_constraint(op.f("fk_profiles_school_id_schools"), type_="foreignkey")
    op.drop_table("schools")
    op.drop_table("profiles")

"""Initial schema for students, submissions, resources and store metadata

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "202610190001"
down_revision = None
branch_labels = None
depends_on = None

user_role_enum = sa.Enum("STUDENT", "TEACHER", name="user_role")
semester_enum = sa.Enum("1.1", "1.2", "2.1", "2.2", name="semester")
submission_status_enum = sa.Enum("ontime", "late", name="submission_status")
resource_type_enum = sa.Enum("worksheet", "past_paper", name="resource_type")


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("badges", sa.JSON(), nullable=False),
        sa.Column("check_in_date", sa.Date(), nullable=True),
    )
    op.create_index("ix_students_username", "students", ["username"], unique=True)

    op.create_table(
        "submissions",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("student_username", sa.String(length=64), nullable=False),
        sa.Column("semester", semester_enum, nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("study_description", sa.Text(), nullable=False),
        sa.Column("help_topics", sa.Text(), nullable=True),
        sa.Column("request_past_paper", sa.Boolean(), nullable=False),
        sa.Column("uploaded_file", sa.String(length=255), nullable=True),
        sa.Column("printed", sa.Boolean(), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("status", submission_status_enum, nullable=False),
    )
    op.create_index("ix_submissions_id", "submissions", ["id"], unique=True)
    op.create_index("ix_submissions_student_username", "submissions", ["student_username"])

    op.create_table(
        "resources",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("type", resource_type_enum, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("semester", semester_enum, nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("uploaded_by", sa.String(length=128), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_resources_id", "resources", ["id"], unique=True)
    op.create_index("ix_resources_semester", "resources", ["semester"])

    op.create_table(
        "store_meta",
        sa.Column("key", sa.String(length=64), primary_key=True),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("store_meta")
    op.drop_index("ix_resources_semester", table_name="resources")
    op.drop_index("ix_resources_id", table_name="resources")
    op.drop_table("resources")
    op.drop_index("ix_submissions_student_username", table_name="submissions")
    op.drop_index("ix_submissions_id", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_students_username", table_name="students")
    op.drop_table("students")
    for enum_type in (
        resource_type_enum,
        submission_status_enum,
        semester_enum,
        user_role_enum,
    ):
        enum_type.drop(op.get_bind(), checkfirst=True)

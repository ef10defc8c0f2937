from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from geckotrack.domain.models import ResourceType, Semester, SubmissionStatus, UserRole

from .base import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


semester_enum = Enum(Semester, name="semester", values_callable=_enum_values)


class StudentRecord(Base):
    """SQLAlchemy model for the students collection.

    ``seq`` records insertion order; ``username`` is the business key.
    """

    __tablename__ = "students"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=_enum_values),
        default=UserRole.STUDENT,
        nullable=False,
    )
    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    badges: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    check_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<StudentRecord(username={self.username}, points={self.points})>"


class SubmissionRecord(Base):
    __tablename__ = "submissions"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, index=True)
    student_username: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    semester: Mapped[Semester] = mapped_column(
        semester_enum,
        nullable=False,
    )
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    study_description: Mapped[str] = mapped_column(Text, nullable=False)
    help_topics: Mapped[str | None] = mapped_column(Text, nullable=True)
    request_past_paper: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    uploaded_file: Mapped[str | None] = mapped_column(String(255), nullable=True)
    printed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    status: Mapped[SubmissionStatus] = mapped_column(
        Enum(SubmissionStatus, name="submission_status", values_callable=_enum_values),
        default=SubmissionStatus.ONTIME,
        nullable=False,
    )


class ResourceRecord(Base):
    __tablename__ = "resources"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, index=True)
    type: Mapped[ResourceType] = mapped_column(
        Enum(ResourceType, name="resource_type", values_callable=_enum_values),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    semester: Mapped[Semester] = mapped_column(
        semester_enum,
        nullable=False,
        index=True,
    )
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    uploaded_by: Mapped[str] = mapped_column(String(128), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class StoreMeta(Base):
    """Key/value markers about the store itself (e.g. roster seeded)."""

    __tablename__ = "store_meta"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

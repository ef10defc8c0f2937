"""Per-collection repositories bound to one session.

Repositories translate between ORM rows and domain dataclasses; callers never
see ORM instances. Ordering is always insertion order (``seq``).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geckotrack.domain.errors import DuplicateIdError, NotFoundError
from geckotrack.domain.models import Resource, Semester, StudentProfile, Submission
from geckotrack.infrastructure.db.models import ResourceRecord, StudentRecord, SubmissionRecord

if TYPE_CHECKING:
    from sqlalchemy import Select

EntityT = TypeVar("EntityT")
RecordT = TypeVar("RecordT", StudentRecord, SubmissionRecord, ResourceRecord)


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class _Repository(Generic[EntityT, RecordT]):
    record_type: type[RecordT]
    key_field: str
    entity_name: str

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _key_column(self) -> Any:
        return getattr(self.record_type, self.key_field)

    def _ordered(self) -> Select[tuple[RecordT]]:
        return select(self.record_type).order_by(self.record_type.seq)

    async def _get_record(self, key: str) -> RecordT | None:
        stmt = select(self.record_type).where(self._key_column() == key)
        return await self.session.scalar(stmt)

    async def _list_where(self, *criteria: Any) -> list[EntityT]:
        stmt = self._ordered()
        if criteria:
            stmt = stmt.where(*criteria)
        records = (await self.session.execute(stmt)).scalars().all()
        return [self.to_entity(record) for record in records]

    async def list(self) -> list[EntityT]:
        return await self._list_where()

    async def get(self, key: str) -> EntityT | None:
        record = await self._get_record(key)
        return self.to_entity(record) if record is not None else None

    async def insert(self, entity: EntityT) -> None:
        key = getattr(entity, self.key_field)
        if await self._get_record(key) is not None:
            raise DuplicateIdError(f"{self.entity_name} '{key}' already exists")
        self.session.add(self.to_record(entity))
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateIdError(f"{self.entity_name} '{key}' already exists") from exc

    async def replace(self, key: str, entity: EntityT) -> None:
        record = await self._get_record(key)
        if record is None:
            raise NotFoundError(f"{self.entity_name} '{key}' not found")
        self.apply(record, entity)
        await self.session.flush()

    def to_entity(self, record: RecordT) -> EntityT:
        raise NotImplementedError

    def to_record(self, entity: EntityT) -> RecordT:
        raise NotImplementedError

    def apply(self, record: RecordT, entity: EntityT) -> None:
        raise NotImplementedError


class StudentRepository(_Repository[StudentProfile, StudentRecord]):
    record_type = StudentRecord
    key_field = "username"
    entity_name = "Student"

    def to_entity(self, record: StudentRecord) -> StudentProfile:
        return StudentProfile(
            username=record.username,
            name=record.name,
            role=record.role,
            points=record.points,
            badges=set(record.badges or []),
            check_in_date=record.check_in_date,
        )

    def to_record(self, entity: StudentProfile) -> StudentRecord:
        record = StudentRecord(username=entity.username)
        self.apply(record, entity)
        return record

    def apply(self, record: StudentRecord, entity: StudentProfile) -> None:
        # username is immutable; only attributes are overwritten
        record.name = entity.name
        record.role = entity.role
        record.points = entity.points
        record.badges = sorted(entity.badges)
        record.check_in_date = entity.check_in_date


class SubmissionRepository(_Repository[Submission, SubmissionRecord]):
    record_type = SubmissionRecord
    key_field = "id"
    entity_name = "Submission"

    async def list_for_student(self, student_username: str) -> list[Submission]:
        return await self._list_where(SubmissionRecord.student_username == student_username)

    def to_entity(self, record: SubmissionRecord) -> Submission:
        return Submission(
            id=record.id,
            student_username=record.student_username,
            semester=record.semester,
            week=record.week,
            study_description=record.study_description,
            help_topics=record.help_topics,
            request_past_paper=record.request_past_paper,
            uploaded_file=record.uploaded_file,
            printed=record.printed,
            timestamp=_aware(record.timestamp),
            status=record.status,
        )

    def to_record(self, entity: Submission) -> SubmissionRecord:
        record = SubmissionRecord(id=entity.id)
        self.apply(record, entity)
        return record

    def apply(self, record: SubmissionRecord, entity: Submission) -> None:
        record.student_username = entity.student_username
        record.semester = entity.semester
        record.week = entity.week
        record.study_description = entity.study_description
        record.help_topics = entity.help_topics
        record.request_past_paper = entity.request_past_paper
        record.uploaded_file = entity.uploaded_file
        record.printed = entity.printed
        record.timestamp = entity.timestamp
        record.status = entity.status


class ResourceRepository(_Repository[Resource, ResourceRecord]):
    record_type = ResourceRecord
    key_field = "id"
    entity_name = "Resource"

    async def list_for_semester(self, semester: Semester) -> list[Resource]:
        return await self._list_where(ResourceRecord.semester == semester)

    def to_entity(self, record: ResourceRecord) -> Resource:
        return Resource(
            id=record.id,
            type=record.type,
            title=record.title,
            filename=record.filename,
            semester=record.semester,
            week=record.week,
            uploaded_by=record.uploaded_by,
            timestamp=_aware(record.timestamp),
        )

    def to_record(self, entity: Resource) -> ResourceRecord:
        record = ResourceRecord(id=entity.id)
        self.apply(record, entity)
        return record

    def apply(self, record: ResourceRecord, entity: Resource) -> None:
        record.type = entity.type
        record.title = entity.title
        record.filename = entity.filename
        record.semester = entity.semester
        record.week = entity.week
        record.uploaded_by = entity.uploaded_by
        record.timestamp = entity.timestamp

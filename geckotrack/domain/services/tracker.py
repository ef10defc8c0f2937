"""
Tracker service: business rules over the entity store.

- Study submissions are unique per (student, semester, week) and earn the
  homework award.
- The point ledger never goes below zero.
- Check-ins are last-write-wins; past dates are kept as-is.
- Leaderboard order is points descending, ties kept in store order.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import date

import structlog

from geckotrack.domain import leveling
from geckotrack.domain.errors import (
    DuplicateSubmissionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from geckotrack.domain.models import (
    Badge,
    CheckInStatus,
    GeckoLevel,
    Identity,
    LevelProgress,
    Resource,
    ResourceType,
    Semester,
    StudentProfile,
    Submission,
    SubmissionStatus,
    UserRole,
    utcnow,
)
from geckotrack.domain.reference_data import (
    BADGES,
    DEFAULT_TEACHER_NAME,
    DEFAULT_TEACHER_USERNAME,
    MAX_WEEK,
    MIN_WEEK,
    SEMESTERS,
    PointAward,
)
from geckotrack.domain.services.check_in import check_in_status, parse_date
from geckotrack.domain.services.locks import KeyedLocks
from geckotrack.infrastructure.repositories.store import EntityStore
from geckotrack.infrastructure.repositories.unit_of_work import UnitOfWork

logger = structlog.get_logger()


@dataclass(slots=True)
class RankedStudent:
    rank: int
    student: StudentProfile
    level: GeckoLevel


@dataclass(slots=True)
class BadgeStatus:
    badge: Badge
    earned: bool


@dataclass(slots=True)
class StudentOverview:
    student: StudentProfile
    level: GeckoLevel
    grade: str
    progress: LevelProgress
    rank: int | None
    check_in: CheckInStatus
    badges: list[BadgeStatus]
    submissions: list[Submission]


def parse_semester(value: Semester | str) -> Semester:
    try:
        return Semester(value)
    except ValueError as exc:
        allowed = ", ".join(semester.value for semester in SEMESTERS)
        raise ValidationError(f"Unknown semester '{value}' (expected one of {allowed})") from exc


def validate_week(week: int) -> int:
    if isinstance(week, bool) or not isinstance(week, int):
        raise ValidationError(f"Week must be an integer, got {week!r}")
    if not MIN_WEEK <= week <= MAX_WEEK:
        raise ValidationError(f"Week must be between {MIN_WEEK} and {MAX_WEEK}, got {week}")
    return week


def _required_text(value: str | None, field_name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field_name} is required")
    return cleaned


def _optional_text(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


def _new_id() -> str:
    return str(uuid.uuid4())


class TrackerService:
    """Domain logic for submissions, the point ledger, check-ins and resources."""

    def __init__(
        self,
        store: EntityStore,
        *,
        teacher_username: str = DEFAULT_TEACHER_USERNAME,
        teacher_name: str = DEFAULT_TEACHER_NAME,
    ) -> None:
        self.store = store
        self.teacher = Identity(
            username=teacher_username,
            name=teacher_name,
            role=UserRole.TEACHER,
        )
        self._locks = KeyedLocks()

    # --- identity ---

    async def login(self, username: str) -> Identity:
        """Resolve a username to an identity; credentials are checked upstream."""
        if not username:
            raise ValidationError("Username is required")
        if username == self.teacher.username:
            await logger.ainfo("login_teacher", username=username)
            return self.teacher

        async with self.store.unit_of_work() as uow:
            student = await uow.students.get(username)
        if student is None:
            await logger.ainfo("login_unknown_user", username=username)
            raise NotFoundError(f"Student '{username}' not found")

        await logger.ainfo("login_student", username=username)
        return student.identity

    async def get_student(self, username: str) -> StudentProfile:
        async with self.store.unit_of_work() as uow:
            student = await uow.students.get(username)
        if student is None:
            raise NotFoundError(f"Student '{username}' not found")
        return student

    # --- submissions ---

    async def list_submissions(self, student_username: str | None = None) -> list[Submission]:
        async with self.store.unit_of_work() as uow:
            if student_username is None:
                return await uow.submissions.list()
            return await uow.submissions.list_for_student(student_username)

    async def filter_submissions(
        self,
        *,
        semester: Semester | str | None = None,
        week: int | None = None,
        name_query: str = "",
    ) -> list[Submission]:
        """Instructor view: exact semester/week, case-insensitive student-name substring."""
        semester_value = parse_semester(semester) if semester is not None else None
        week_value = validate_week(week) if week is not None else None
        query = name_query.strip().lower()

        async with self.store.unit_of_work() as uow:
            submissions = await uow.submissions.list()
            students = await uow.students.list()

        names = {student.username: student.name.lower() for student in students}

        return [
            submission
            for submission in submissions
            if (semester_value is None or submission.semester == semester_value)
            and (week_value is None or submission.week == week_value)
            and query in names.get(submission.student_username, "")
        ]

    async def submit_study(
        self,
        *,
        student_username: str,
        semester: Semester | str,
        week: int,
        description: str,
        help_topics: str | None = None,
        request_past_paper: bool = False,
        uploaded_file: str | None = None,
    ) -> Submission:
        """Record a weekly study submission and credit the homework award.

        Raises DuplicateSubmissionError, without writing anything, when the
        student already submitted for this semester and week. A failed point
        credit is logged and does not undo the submission.
        """
        semester_value = parse_semester(semester)
        week_value = validate_week(week)
        study_description = _required_text(description, "Study description")

        async with self._locks.hold(f"student:{student_username}"):
            async with self.store.unit_of_work() as uow:
                if await uow.students.get(student_username) is None:
                    raise NotFoundError(f"Student '{student_username}' not found")

                existing = await uow.submissions.list_for_student(student_username)
                if any(
                    item.semester == semester_value and item.week == week_value
                    for item in existing
                ):
                    await logger.awarning(
                        "submission_duplicate_rejected",
                        student=student_username,
                        semester=semester_value.value,
                        week=week_value,
                    )
                    raise DuplicateSubmissionError(
                        f"'{student_username}' already submitted for "
                        f"{semester_value.label}, week {week_value}"
                    )

                submission = Submission(
                    id=_new_id(),
                    student_username=student_username,
                    semester=semester_value,
                    week=week_value,
                    study_description=study_description,
                    help_topics=_optional_text(help_topics),
                    request_past_paper=request_past_paper,
                    uploaded_file=_optional_text(uploaded_file),
                    printed=False,
                    timestamp=utcnow(),
                    status=SubmissionStatus.ONTIME,
                )
                await uow.submissions.insert(submission)

            await logger.ainfo(
                "submission_created",
                submission_id=submission.id,
                student=student_username,
                semester=semester_value.value,
                week=week_value,
                request_past_paper=request_past_paper,
            )

            try:
                await self._apply_delta(student_username, PointAward.HOMEWORK.value)
            except (PersistenceError, NotFoundError) as exc:
                await logger.awarning(
                    "homework_points_credit_failed",
                    submission_id=submission.id,
                    student=student_username,
                    error=str(exc),
                )

        return submission

    async def set_printed(self, submission_id: str, printed: bool) -> Submission:
        """Set the printed flag; setting the current value again is a no-op."""
        async with self._locks.hold(f"submission:{submission_id}"):
            async with self.store.unit_of_work() as uow:
                submission = await uow.submissions.get(submission_id)
                if submission is None:
                    raise NotFoundError(f"Submission '{submission_id}' not found")
                if submission.printed == printed:
                    return submission
                updated = replace(submission, printed=printed)
                await uow.submissions.replace(submission_id, updated)

        await logger.ainfo("submission_printed_set", submission_id=submission_id, printed=printed)
        return updated

    # --- resources ---

    async def list_resources(self, semester: Semester | str | None = None) -> list[Resource]:
        async with self.store.unit_of_work() as uow:
            if semester is None:
                return await uow.resources.list()
            return await uow.resources.list_for_semester(parse_semester(semester))

    async def resources_by_semester(self) -> dict[Semester, list[Resource]]:
        grouped: dict[Semester, list[Resource]] = {semester: [] for semester in SEMESTERS}
        for resource in await self.list_resources():
            grouped[resource.semester].append(resource)
        return grouped

    async def publish_resource(
        self,
        *,
        title: str,
        resource_type: ResourceType | str,
        semester: Semester | str,
        week: int,
        filename: str,
        uploaded_by: str | None = None,
    ) -> Resource:
        try:
            type_value = ResourceType(resource_type)
        except ValueError as exc:
            raise ValidationError(f"Unknown resource type '{resource_type}'") from exc

        resource = Resource(
            id=_new_id(),
            type=type_value,
            title=_required_text(title, "Title"),
            filename=_required_text(filename, "Filename"),
            semester=parse_semester(semester),
            week=validate_week(week),
            uploaded_by=_optional_text(uploaded_by) or self.teacher.name,
            timestamp=utcnow(),
        )
        async with self.store.unit_of_work() as uow:
            await uow.resources.insert(resource)

        await logger.ainfo(
            "resource_published",
            resource_id=resource.id,
            resource_type=type_value.value,
            semester=resource.semester.value,
            week=resource.week,
        )
        return resource

    # --- check-ins ---

    async def schedule_check_in(self, student_username: str, when: date | str) -> StudentProfile:
        """Overwrite the student's check-in date; no history is kept."""
        check_in_date = parse_date(when)
        async with self._locks.hold(f"student:{student_username}"):
            async with self.store.unit_of_work() as uow:
                student = await self._require_student(uow, student_username)
                updated = replace(student, check_in_date=check_in_date)
                await uow.students.replace(student_username, updated)

        await logger.ainfo(
            "check_in_scheduled",
            student=student_username,
            date=check_in_date.isoformat(),
            previous=student.check_in_date.isoformat() if student.check_in_date else None,
        )
        return updated

    async def scheduled_check_ins(self) -> list[StudentProfile]:
        async with self.store.unit_of_work() as uow:
            students = await uow.students.list()
        return [student for student in students if student.check_in_date is not None]

    def check_in_status(self, student: StudentProfile, today: date | str) -> CheckInStatus:
        return check_in_status(student.check_in_date, today)

    # --- point ledger ---

    async def adjust_points(self, student_username: str, delta: int) -> int:
        """Apply ``delta`` to the ledger, flooring at zero. Returns the new balance."""
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(f"Point delta must be an integer, got {delta!r}")
        async with self._locks.hold(f"student:{student_username}"):
            return await self._apply_delta(student_username, delta)

    async def award(self, student_username: str, award: PointAward | str) -> int:
        if isinstance(award, str):
            try:
                award = PointAward[award.upper()]
            except KeyError as exc:
                raise ValidationError(f"Unknown point award '{award}'") from exc
        return await self.adjust_points(student_username, award.value)

    async def _apply_delta(self, student_username: str, delta: int) -> int:
        # Callers hold the student's lock
        async with self.store.unit_of_work() as uow:
            student = await self._require_student(uow, student_username)
            new_points = max(0, student.points + delta)
            await uow.students.replace(student_username, replace(student, points=new_points))

        await logger.ainfo(
            "points_adjusted",
            student=student_username,
            delta=delta,
            previous=student.points,
            points=new_points,
        )
        return new_points

    # --- rankings ---

    async def leaderboard(self) -> list[StudentProfile]:
        async with self.store.unit_of_work() as uow:
            students = await uow.students.list()
        # sorted() is stable, also with reverse=True
        return sorted(
            (student for student in students if student.role == UserRole.STUDENT),
            key=lambda student: student.points,
            reverse=True,
        )

    async def ranked_leaderboard(self) -> list[RankedStudent]:
        return [
            RankedStudent(rank=index, student=student, level=leveling.level(student.points))
            for index, student in enumerate(await self.leaderboard(), start=1)
        ]

    async def rank_of(self, username: str) -> int | None:
        for index, student in enumerate(await self.leaderboard(), start=1):
            if student.username == username:
                return index
        return None

    async def student_overview(self, username: str, today: date | str) -> StudentOverview:
        """Everything the student dashboard shows."""
        async with self.store.unit_of_work() as uow:
            student = await self._require_student(uow, username)
            submissions = await uow.submissions.list_for_student(username)

        rank = await self.rank_of(username)
        return StudentOverview(
            student=student,
            level=leveling.level(student.points),
            grade=leveling.grade(student.points),
            progress=leveling.level_progress(student.points),
            rank=rank,
            check_in=check_in_status(student.check_in_date, today),
            badges=[BadgeStatus(badge=badge, earned=badge.id in student.badges) for badge in BADGES],
            submissions=submissions,
        )

    async def _require_student(self, uow: UnitOfWork, username: str) -> StudentProfile:
        student = await uow.students.get(username)
        if student is None:
            raise NotFoundError(f"Student '{username}' not found")
        return student

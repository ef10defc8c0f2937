from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import UTC, date, datetime


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"


class Semester(str, enum.Enum):
    S1_1 = "1.1"
    S1_2 = "1.2"
    S2_1 = "2.1"
    S2_2 = "2.2"

    @property
    def label(self) -> str:
        return f"Semester {self.value}"


class SubmissionStatus(str, enum.Enum):
    """Submission timeliness.

    Note: nothing produces LATE yet; every submission is created ONTIME.
    """

    ONTIME = "ontime"
    LATE = "late"


class ResourceType(str, enum.Enum):
    WORKSHEET = "worksheet"
    PAST_PAPER = "past_paper"


class GeckoLevel(str, enum.Enum):
    HATCHLING = "Hatchling"
    CLIMBER = "Climber"
    STALKER = "Stalker"
    ALPHA = "Alpha Gecko"


class CheckInStatus(str, enum.Enum):
    SCHEDULED_TODAY = "scheduled_today"
    SCHEDULED_FUTURE = "scheduled_future"
    NONE = "none"


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class Identity:
    """Represents a logged-in actor."""

    username: str
    name: str
    role: UserRole


@dataclass(slots=True)
class StudentProfile:
    """A student and their point ledger."""

    username: str
    name: str
    role: UserRole = UserRole.STUDENT
    points: int = 0
    badges: set[str] = field(default_factory=set)
    check_in_date: date | None = None

    @property
    def identity(self) -> Identity:
        return Identity(username=self.username, name=self.name, role=self.role)


@dataclass(slots=True)
class Submission:
    id: str
    student_username: str
    semester: Semester
    week: int
    study_description: str
    help_topics: str | None = None
    request_past_paper: bool = False
    uploaded_file: str | None = None
    printed: bool = False
    timestamp: datetime = field(default_factory=utcnow)
    status: SubmissionStatus = SubmissionStatus.ONTIME


@dataclass(slots=True)
class Resource:
    id: str
    type: ResourceType
    title: str
    filename: str
    semester: Semester
    week: int
    uploaded_by: str
    timestamp: datetime = field(default_factory=utcnow)


@dataclass(slots=True, frozen=True)
class LevelProgress:
    current: int
    max: int
    percent: float
    next: str


@dataclass(slots=True, frozen=True)
class Badge:
    id: str
    label: str
    description: str

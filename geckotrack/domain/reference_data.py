from __future__ import annotations

import enum
from datetime import date

from geckotrack.domain.models import Badge, Semester, StudentProfile, UserRole

SEMESTERS: tuple[Semester, ...] = tuple(Semester)

MIN_WEEK = 1
MAX_WEEK = 10
WEEKS: tuple[int, ...] = tuple(range(MIN_WEEK, MAX_WEEK + 1))


class PointAward(int, enum.Enum):
    HOMEWORK = 5
    CLASSWORK = 3
    QUIZ = 2
    TOP_PERFORMER = 10
    LATE_PENALTY = -2


BADGES: tuple[Badge, ...] = (
    Badge(id="on_fire", label="\U0001F525 On Fire", description="3 activities in one day"),
    Badge(
        id="speed_gecko",
        label="\u26A1 Speed Gecko",
        description="Submission before deadline",
    ),
    Badge(id="tech_brain", label="\U0001F9E0 Tech Brain", description="Highest quiz score"),
    Badge(id="gecko_legend", label="\U0001F3C6 Gecko Legend", description="Grade A Achieved"),
)

BADGES_BY_ID: dict[str, Badge] = {badge.id: badge for badge in BADGES}

DEFAULT_TEACHER_USERNAME = "admin"
DEFAULT_TEACHER_NAME = "Mr. Teacher"


def bootstrap_roster() -> list[StudentProfile]:
    """Students seeded into a store that has never been initialized."""
    return [
        StudentProfile(
            username="student1",
            name="Alice Smith",
            role=UserRole.STUDENT,
            points=12,
        ),
        StudentProfile(
            username="student2",
            name="Bob Jones",
            role=UserRole.STUDENT,
            points=28,
            badges={"speed_gecko"},
            check_in_date=date(2023, 11, 20),
        ),
        StudentProfile(
            username="student3",
            name="Charlie Day",
            role=UserRole.STUDENT,
            points=42,
            badges={"tech_brain"},
        ),
    ]

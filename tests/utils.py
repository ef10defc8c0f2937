from __future__ import annotations

from typing import Any

from geckotrack.domain.models import StudentProfile, UserRole
from geckotrack.infrastructure.repositories import EntityStore


async def add_students(store: EntityStore, *entries: tuple[str, str, int]) -> None:
    """Insert (username, name, points) students in the given order."""
    for username, name, points in entries:
        await store.students.insert(
            StudentProfile(username=username, name=name, role=UserRole.STUDENT, points=points)
        )


def submission_payload(
    student: str = "student1",
    semester: str = "1.1",
    week: int = 3,
    **overrides: Any,
) -> dict[str, Any]:
    """JSON body for POST /submissions."""
    payload: dict[str, Any] = {
        "student_username": student,
        "semester": semester,
        "week": week,
        "study_description": "Read chapter 4 and did the exercises",
        "help_topics": "Recursion",
        "request_past_paper": False,
    }
    payload.update(overrides)
    return payload

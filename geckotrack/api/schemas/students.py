from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, model_validator

from geckotrack.api.schemas.reference import BadgeItem
from geckotrack.api.schemas.submissions import SubmissionItem
from geckotrack.domain.models import CheckInStatus, GeckoLevel, StudentProfile, UserRole
from geckotrack.domain.reference_data import PointAward


class StudentItem(BaseModel):
    username: str
    name: str
    role: UserRole
    points: int
    badges: list[str]
    check_in_date: dt.date | None = None


class LeaderboardEntry(BaseModel):
    rank: int
    username: str
    name: str
    points: int
    level: GeckoLevel


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntry]


class LevelProgressItem(BaseModel):
    current: int
    max: int
    percent: float
    next: str


class BadgeStatusItem(BadgeItem):
    earned: bool


class StudentOverviewResponse(BaseModel):
    student: StudentItem
    level: GeckoLevel
    grade: str
    progress: LevelProgressItem
    rank: int | None
    check_in: CheckInStatus
    badges: list[BadgeStatusItem]
    submissions: list[SubmissionItem]


class PointsRequest(BaseModel):
    """Either a raw ``delta`` or a named ``award``."""

    delta: int | None = None
    award: PointAward | None = Field(None, description="Award name, e.g. QUIZ")

    @model_validator(mode="before")
    @classmethod
    def _award_by_name(cls, data):
        if isinstance(data, dict) and isinstance(data.get("award"), str):
            name = data["award"].upper()
            if name in PointAward.__members__:
                data = {**data, "award": PointAward[name]}
        return data

    @model_validator(mode="after")
    def _exactly_one(self) -> PointsRequest:
        if (self.delta is None) == (self.award is None):
            raise ValueError("Provide exactly one of 'delta' or 'award'")
        return self


class PointsResponse(BaseModel):
    username: str
    points: int


class CheckInRequest(BaseModel):
    date: dt.date


class CheckInItem(BaseModel):
    username: str
    name: str
    check_in_date: dt.date


def student_item(student: StudentProfile) -> StudentItem:
    return StudentItem(
        username=student.username,
        name=student.name,
        role=student.role,
        points=student.points,
        badges=sorted(student.badges),
        check_in_date=student.check_in_date,
    )

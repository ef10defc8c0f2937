from __future__ import annotations

from pydantic import BaseModel


class SemesterItem(BaseModel):
    id: str
    label: str


class BadgeItem(BaseModel):
    id: str
    label: str
    description: str


class ReferenceResponse(BaseModel):
    semesters: list[SemesterItem]
    weeks: list[int]
    point_awards: dict[str, int]
    badges: list[BadgeItem]

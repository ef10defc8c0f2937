from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from geckotrack.domain.models import Semester, Submission, SubmissionStatus


class SubmissionCreate(BaseModel):
    student_username: str = Field(..., min_length=1, max_length=64)
    semester: Semester
    week: int = Field(..., ge=1, le=10)
    study_description: str = Field(..., min_length=1)
    help_topics: str | None = None
    request_past_paper: bool = False
    uploaded_file: str | None = Field(None, max_length=255, description="Filename only")


class SubmissionItem(BaseModel):
    id: str
    student_username: str
    semester: Semester
    week: int
    study_description: str
    help_topics: str | None = None
    request_past_paper: bool
    uploaded_file: str | None = None
    printed: bool
    timestamp: datetime
    status: SubmissionStatus


class SubmissionsResponse(BaseModel):
    submissions: list[SubmissionItem]


class PrintedUpdate(BaseModel):
    printed: bool


def submission_item(submission: Submission) -> SubmissionItem:
    return SubmissionItem.model_validate(submission, from_attributes=True)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from geckotrack.api.deps import get_tracker, http_error
from geckotrack.api.schemas.submissions import (
    PrintedUpdate,
    SubmissionCreate,
    SubmissionItem,
    SubmissionsResponse,
    submission_item,
)
from geckotrack.domain.errors import GeckoError
from geckotrack.domain.models import Semester
from geckotrack.domain.services import TrackerService

router = APIRouter(prefix="/submissions", tags=["Submissions"])


@router.get("", response_model=SubmissionsResponse)
async def list_submissions(
    student: str | None = Query(None, description="Only this student's submissions"),
    semester: Semester | None = Query(None),
    week: int | None = Query(None, ge=1, le=10),
    q: str = Query("", description="Case-insensitive student name search"),
    tracker: TrackerService = Depends(get_tracker),
) -> SubmissionsResponse:
    try:
        if semester is None and week is None and not q:
            submissions = await tracker.list_submissions(student)
        else:
            submissions = await tracker.filter_submissions(
                semester=semester, week=week, name_query=q
            )
            if student is not None:
                submissions = [s for s in submissions if s.student_username == student]
    except GeckoError as exc:
        raise http_error(exc) from exc

    return SubmissionsResponse(submissions=[submission_item(s) for s in submissions])


@router.post("", response_model=SubmissionItem, status_code=status.HTTP_201_CREATED)
async def create_submission(
    payload: SubmissionCreate,
    tracker: TrackerService = Depends(get_tracker),
) -> SubmissionItem:
    """Record a weekly study submission; awards homework points."""
    try:
        submission = await tracker.submit_study(
            student_username=payload.student_username,
            semester=payload.semester,
            week=payload.week,
            description=payload.study_description,
            help_topics=payload.help_topics,
            request_past_paper=payload.request_past_paper,
            uploaded_file=payload.uploaded_file,
        )
    except GeckoError as exc:
        raise http_error(exc) from exc
    return submission_item(submission)


@router.patch("/{submission_id}/printed", response_model=SubmissionItem)
async def set_printed(
    submission_id: str,
    payload: PrintedUpdate,
    tracker: TrackerService = Depends(get_tracker),
) -> SubmissionItem:
    try:
        submission = await tracker.set_printed(submission_id, payload.printed)
    except GeckoError as exc:
        raise http_error(exc) from exc
    return submission_item(submission)

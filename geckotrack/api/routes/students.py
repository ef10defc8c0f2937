from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query

from geckotrack.api.deps import get_tracker, http_error
from geckotrack.api.schemas.students import (
    BadgeStatusItem,
    CheckInItem,
    CheckInRequest,
    LeaderboardEntry,
    LeaderboardResponse,
    LevelProgressItem,
    PointsRequest,
    PointsResponse,
    StudentItem,
    StudentOverviewResponse,
    student_item,
)
from geckotrack.api.schemas.submissions import submission_item
from geckotrack.domain.errors import GeckoError
from geckotrack.domain.services import TrackerService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(tracker: TrackerService = Depends(get_tracker)) -> LeaderboardResponse:
    """Students ranked by points, ties in roster order."""
    try:
        ranked = await tracker.ranked_leaderboard()
    except GeckoError as exc:
        raise http_error(exc) from exc

    return LeaderboardResponse(
        entries=[
            LeaderboardEntry(
                rank=entry.rank,
                username=entry.student.username,
                name=entry.student.name,
                points=entry.student.points,
                level=entry.level,
            )
            for entry in ranked
        ]
    )


@router.get("/check-ins", response_model=list[CheckInItem])
async def list_check_ins(tracker: TrackerService = Depends(get_tracker)) -> list[CheckInItem]:
    """Every stored check-in date, past ones included."""
    try:
        students = await tracker.scheduled_check_ins()
    except GeckoError as exc:
        raise http_error(exc) from exc

    return [
        CheckInItem(username=s.username, name=s.name, check_in_date=s.check_in_date)
        for s in students
    ]


@router.get("/{username}", response_model=StudentItem)
async def get_student(
    username: str,
    tracker: TrackerService = Depends(get_tracker),
) -> StudentItem:
    try:
        student = await tracker.get_student(username)
    except GeckoError as exc:
        raise http_error(exc) from exc
    return student_item(student)


@router.get("/{username}/overview", response_model=StudentOverviewResponse)
async def get_student_overview(
    username: str,
    today: dt.date | None = Query(None, description="Defaults to the current UTC date"),
    tracker: TrackerService = Depends(get_tracker),
) -> StudentOverviewResponse:
    """Dashboard summary: level, grade, progress, rank, check-in and badges."""
    today = today or dt.datetime.now(dt.UTC).date()
    try:
        overview = await tracker.student_overview(username, today)
    except GeckoError as exc:
        raise http_error(exc) from exc

    return StudentOverviewResponse(
        student=student_item(overview.student),
        level=overview.level,
        grade=overview.grade,
        progress=LevelProgressItem(
            current=overview.progress.current,
            max=overview.progress.max,
            percent=overview.progress.percent,
            next=overview.progress.next,
        ),
        rank=overview.rank,
        check_in=overview.check_in,
        badges=[
            BadgeStatusItem(
                id=status.badge.id,
                label=status.badge.label,
                description=status.badge.description,
                earned=status.earned,
            )
            for status in overview.badges
        ],
        submissions=[submission_item(submission) for submission in overview.submissions],
    )


@router.post("/{username}/points", response_model=PointsResponse)
async def adjust_points(
    username: str,
    payload: PointsRequest,
    tracker: TrackerService = Depends(get_tracker),
) -> PointsResponse:
    """Apply a named award or a raw delta; the balance never drops below zero."""
    try:
        if payload.award is not None:
            points = await tracker.award(username, payload.award)
        else:
            points = await tracker.adjust_points(username, payload.delta)
    except GeckoError as exc:
        raise http_error(exc) from exc

    return PointsResponse(username=username, points=points)


@router.put("/{username}/check-in", response_model=StudentItem)
async def schedule_check_in(
    username: str,
    payload: CheckInRequest,
    tracker: TrackerService = Depends(get_tracker),
) -> StudentItem:
    try:
        student = await tracker.schedule_check_in(username, payload.date)
    except GeckoError as exc:
        raise http_error(exc) from exc
    return student_item(student)

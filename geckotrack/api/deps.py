from __future__ import annotations

from fastapi import HTTPException, Request, status

from geckotrack.domain.errors import (
    DuplicateIdError,
    DuplicateSubmissionError,
    GeckoError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from geckotrack.domain.services import TrackerService

_STATUS_BY_ERROR: tuple[tuple[type[GeckoError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateSubmissionError, status.HTTP_409_CONFLICT),
    (DuplicateIdError, status.HTTP_409_CONFLICT),
    (ValidationError, 422),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def get_tracker(request: Request) -> TrackerService:
    """Return the tracker service created during application startup."""
    return request.app.state.tracker


def http_error(exc: GeckoError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))

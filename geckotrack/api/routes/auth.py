"""Login route. Resolves identities only; no credential verification."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from geckotrack.api.deps import get_tracker, http_error
from geckotrack.api.schemas.auth import IdentityResponse, LoginRequest
from geckotrack.domain.errors import GeckoError
from geckotrack.domain.services import TrackerService

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/login",
    response_model=IdentityResponse,
    summary="Log in",
    description="Resolve a username to a student or the teacher identity.",
)
async def login(
    payload: LoginRequest,
    tracker: TrackerService = Depends(get_tracker),
) -> IdentityResponse:
    try:
        identity = await tracker.login(payload.username)
    except GeckoError as exc:
        raise http_error(exc) from exc

    return IdentityResponse(username=identity.username, name=identity.name, role=identity.role)

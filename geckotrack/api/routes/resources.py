from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from geckotrack.api.deps import get_tracker, http_error
from geckotrack.api.schemas.resources import (
    ResourceCreate,
    ResourceItem,
    ResourcesResponse,
    resource_item,
)
from geckotrack.domain.errors import GeckoError
from geckotrack.domain.models import Semester
from geckotrack.domain.services import TrackerService

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get("", response_model=ResourcesResponse)
async def list_resources(
    semester: Semester | None = Query(None),
    tracker: TrackerService = Depends(get_tracker),
) -> ResourcesResponse:
    try:
        resources = await tracker.list_resources(semester)
    except GeckoError as exc:
        raise http_error(exc) from exc
    return ResourcesResponse(resources=[resource_item(resource) for resource in resources])


@router.post("", response_model=ResourceItem, status_code=status.HTTP_201_CREATED)
async def publish_resource(
    payload: ResourceCreate,
    tracker: TrackerService = Depends(get_tracker),
) -> ResourceItem:
    """Catalogue a worksheet or past paper; only the filename is recorded."""
    try:
        resource = await tracker.publish_resource(
            title=payload.title,
            resource_type=payload.type,
            semester=payload.semester,
            week=payload.week,
            filename=payload.filename,
            uploaded_by=payload.uploaded_by,
        )
    except GeckoError as exc:
        raise http_error(exc) from exc
    return resource_item(resource)

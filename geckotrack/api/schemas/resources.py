from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from geckotrack.domain.models import Resource, ResourceType, Semester


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: ResourceType
    semester: Semester
    week: int = Field(..., ge=1, le=10)
    filename: str = Field(..., min_length=1, max_length=255)
    uploaded_by: str | None = Field(None, max_length=128)


class ResourceItem(BaseModel):
    id: str
    type: ResourceType
    title: str
    filename: str
    semester: Semester
    week: int
    uploaded_by: str
    timestamp: datetime


class ResourcesResponse(BaseModel):
    resources: list[ResourceItem]


def resource_item(resource: Resource) -> ResourceItem:
    return ResourceItem.model_validate(resource, from_attributes=True)

from __future__ import annotations

from fastapi import APIRouter

from geckotrack.api.schemas.reference import BadgeItem, ReferenceResponse, SemesterItem
from geckotrack.domain.reference_data import BADGES, SEMESTERS, WEEKS, PointAward

router = APIRouter(prefix="/reference", tags=["Reference"])


@router.get("", response_model=ReferenceResponse)
async def get_reference_data() -> ReferenceResponse:
    """Return the fixed semesters, weeks, point awards and badge catalogue."""
    return ReferenceResponse(
        semesters=[SemesterItem(id=semester.value, label=semester.label) for semester in SEMESTERS],
        weeks=list(WEEKS),
        point_awards={award.name: award.value for award in PointAward},
        badges=[
            BadgeItem(id=badge.id, label=badge.label, description=badge.description)
            for badge in BADGES
        ],
    )

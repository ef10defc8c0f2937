"""Domain services."""

from geckotrack.domain.services.check_in import check_in_status, parse_date
from geckotrack.domain.services.locks import KeyedLocks
from geckotrack.domain.services.tracker import (
    BadgeStatus,
    RankedStudent,
    StudentOverview,
    TrackerService,
)

__all__ = [
    "BadgeStatus",
    "KeyedLocks",
    "RankedStudent",
    "StudentOverview",
    "TrackerService",
    "check_in_status",
    "parse_date",
]

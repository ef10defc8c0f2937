from geckotrack.domain.errors import (
    DuplicateIdError,
    DuplicateSubmissionError,
    GeckoError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from geckotrack.domain.models import (
    Badge,
    CheckInStatus,
    GeckoLevel,
    Identity,
    LevelProgress,
    Resource,
    ResourceType,
    Semester,
    StudentProfile,
    Submission,
    SubmissionStatus,
    UserRole,
)

__all__ = [
    "Badge",
    "CheckInStatus",
    "DuplicateIdError",
    "DuplicateSubmissionError",
    "GeckoError",
    "GeckoLevel",
    "Identity",
    "LevelProgress",
    "NotFoundError",
    "PersistenceError",
    "Resource",
    "ResourceType",
    "Semester",
    "StudentProfile",
    "Submission",
    "SubmissionStatus",
    "UserRole",
    "ValidationError",
]

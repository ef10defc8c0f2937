from geckotrack.infrastructure.repositories.collections import (
    ResourceRepository,
    StudentRepository,
    SubmissionRepository,
)
from geckotrack.infrastructure.repositories.store import EntityStore, StoreCollection
from geckotrack.infrastructure.repositories.unit_of_work import UnitOfWork

__all__ = [
    "EntityStore",
    "ResourceRepository",
    "StoreCollection",
    "StudentRepository",
    "SubmissionRepository",
    "UnitOfWork",
]

"""Error kinds raised by the store and the domain service."""

from __future__ import annotations


class GeckoError(Exception):
    """Base exception for tracker errors."""


class NotFoundError(GeckoError):
    """Raised when a referenced student, submission or resource does not exist."""


class DuplicateIdError(GeckoError):
    """Raised when inserting a record whose primary key already exists."""


class DuplicateSubmissionError(GeckoError):
    """Raised when a student already submitted for the same semester and week."""


class ValidationError(GeckoError):
    """Raised when a required field is empty or a value is out of range."""


class PersistenceError(GeckoError):
    """Raised when the underlying store is unavailable or a write failed."""

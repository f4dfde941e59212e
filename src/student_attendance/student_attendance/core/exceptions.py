from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ParseError(DomainError):
    """Raised when a training time string cannot be parsed."""


class ValidationError(DomainError):
    """Raised when submitted attendance edits fail validation.

    ``issues`` holds every problem found in one pass, so callers can render
    all of them at once.
    """

    def __init__(self, message: str, issues: Sequence[object] = ()):
        super().__init__(message)
        self.issues = list(issues)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StateConflictError(DomainError):
    """Raised when a punch does not fit the day's existing record."""


class DuplicateAttendanceError(StateConflictError):
    """Raised by repositories when a live row already exists for (user, date)."""

"""Transition error taxonomy."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories of errors that turn a transition request into a failure."""

    NotFound = "not_found"
    """The entity id does not resolve (404)."""

    InvalidTransition = "invalid_transition"
    """The guard denied the transition (400)."""

    Unauthorized = "unauthorized"
    """The acting administrator may not alter this entity (403)."""

    InvalidArgument = "invalid_argument"
    """The request itself is malformed (400)."""


_STATUS_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.NotFound: 404,
    ErrorCategory.InvalidTransition: 400,
    ErrorCategory.Unauthorized: 403,
    ErrorCategory.InvalidArgument: 400,
}


class TransitionError(Exception):
    """Base class for errors surfaced to the caller of a transition.

    Example:
        ```python
        raise InvalidTransitionError(
            "Only pending or open jobs can be approved",
            details={"entity_id": "job-1", "from": "completed"},
        )
        ```
    """

    category: ErrorCategory = ErrorCategory.InvalidArgument

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize TransitionError.

        Args:
            message: Human-readable error message, shown to the end user.
            details: Additional structured context for logs.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        """HTTP-equivalent status code for this error."""
        return _STATUS_CODES[self.category]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.category.value}, message={self.message!r})"

    def __str__(self) -> str:
        return self.message


class EntityNotFoundError(TransitionError):
    """Raised when the entity id does not resolve."""

    category = ErrorCategory.NotFound


class InvalidTransitionError(TransitionError):
    """Raised when the guard denies a transition."""

    category = ErrorCategory.InvalidTransition


class UnauthorizedTransitionError(TransitionError):
    """Raised when the acting administrator may not alter the entity."""

    category = ErrorCategory.Unauthorized


class InvalidArgumentError(TransitionError):
    """Raised when request input is invalid (unknown status, empty id list, ...)."""

    category = ErrorCategory.InvalidArgument

"""Base model shared by every entity that moves through a status lifecycle."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def status_value(status: Any) -> str:
    """Return the raw string value of a status enum member or plain string."""
    if isinstance(status, Enum):
        return str(status.value)
    return str(status)


class EntityKind(str, Enum):
    """Kinds of entities administrators can transition."""

    Job = "job"
    """A caregiving job posted by a parent."""

    Booking = "booking"
    """A booking between a parent and a caregiver."""

    User = "user"
    """A marketplace account (parent, caregiver or administrator)."""

    Payment = "payment"
    """A payment attached to a booking."""

    Caregiver = "caregiver"
    """A caregiver profile awaiting or holding document verification."""

    @property
    def label(self) -> str:
        """Capitalized kind name used in user-facing messages (e.g. 'Job')."""
        return self.name


class TransitionableEntity(BaseModel):
    """An entity with an opaque id and a status from a fixed per-kind set.

    Subclasses declare ``status`` with their own status enum, so a persisted
    entity can never hold a status outside its kind's declared set.
    Kind-specific payload fields are carried along but never inspected by
    the transition engine.
    """

    kind: ClassVar[EntityKind]

    id: str = Field(
        ...,
        description="Opaque entity identifier",
        min_length=1,
    )
    status_updated_at: datetime | None = Field(
        default=None,
        description="Timestamp of the last status change",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Timestamp when the entity was created",
    )

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate entity ID format."""
        if not v or not v.strip():
            raise ValueError("Entity ID cannot be empty")
        if len(v) > 255:
            raise ValueError("Entity ID must be 255 characters or less")
        return v.strip()

    @property
    def status_value(self) -> str:
        """Current status as its raw string value."""
        return status_value(self.status)

    def apply_status(
        self,
        status: str,
        reason: str | None = None,
        changed_by: str | None = None,
        changed_at: datetime | None = None,
    ) -> None:
        """Apply a status change in place.

        Subclasses extend this to write kind-specific fields that travel
        with a status change (status reason, refund reason, ...).

        Args:
            status: New status value; validated against the kind's enum.
            reason: Optional free-text reason for the change.
            changed_by: Optional id of the administrator applying the change.
            changed_at: Change timestamp. Defaults to now.
        """
        self.status = status
        self.status_updated_at = changed_at or utc_now()

    def contact(self) -> tuple[str, str | None] | None:
        """Return ``(email, name)`` of the party to notify, if any."""
        return None

"""Booking data model and BookingStatus enum."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field

from caredesk.domain.models.entity import EntityKind, TransitionableEntity


class BookingStatus(str, Enum):
    """Lifecycle statuses of a booking."""

    Pending = "pending"
    """Booking requested, not yet confirmed."""

    Confirmed = "confirmed"
    """Booking accepted by both parties."""

    InProgress = "in_progress"
    """Care session is under way."""

    Completed = "completed"
    """Care session finished."""

    Cancelled = "cancelled"
    """Booking was cancelled before completion."""

    NoShow = "no_show"
    """Caregiver or parent did not show up."""


class Booking(TransitionableEntity):
    """A booking between a parent and a caregiver."""

    kind: ClassVar[EntityKind] = EntityKind.Booking

    status: BookingStatus = Field(
        default=BookingStatus.Pending,
        description="Current lifecycle status of the booking",
    )
    parent_id: str | None = Field(default=None, description="Booking parent user id")
    caregiver_id: str | None = Field(default=None, description="Booked caregiver user id")
    job_id: str | None = Field(default=None, description="Job the booking belongs to")
    start_at: datetime | None = Field(default=None, description="Scheduled start")
    end_at: datetime | None = Field(default=None, description="Scheduled end")

"""Job data model and JobStatus enum."""

from enum import Enum
from typing import ClassVar

from pydantic import Field

from caredesk.domain.models.entity import EntityKind, TransitionableEntity


class JobStatus(str, Enum):
    """Lifecycle statuses of a job posting."""

    Open = "open"
    """Job is published and accepting caregivers."""

    Pending = "pending"
    """Job is awaiting administrator review."""

    Confirmed = "confirmed"
    """Job was approved or matched with a caregiver."""

    Completed = "completed"
    """Job has been carried out."""

    Cancelled = "cancelled"
    """Job was rejected or cancelled."""

    Active = "active"
    """Job is live (legacy status still present in older records)."""

    Inactive = "inactive"
    """Job was withdrawn by its owner."""


class Job(TransitionableEntity):
    """A caregiving job posted by a parent."""

    kind: ClassVar[EntityKind] = EntityKind.Job

    status: JobStatus = Field(
        default=JobStatus.Pending,
        description="Current lifecycle status of the job",
    )
    title: str | None = Field(
        default=None,
        description="Short job title",
    )
    parent_id: str | None = Field(
        default=None,
        description="User id of the parent who posted the job",
    )
    location: str | None = Field(
        default=None,
        description="Where the job takes place",
    )

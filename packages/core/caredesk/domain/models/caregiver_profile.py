"""CaregiverProfile data model with the document VerificationStatus enum."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field

from caredesk.domain.models.entity import EntityKind, TransitionableEntity


class VerificationStatus(str, Enum):
    """Review status of a caregiver's submitted documents."""

    Pending = "pending"
    """Documents submitted and waiting for review."""

    Verified = "verified"
    """Documents accepted; the profile can be listed."""

    Rejected = "rejected"
    """Documents refused."""


class CaregiverProfile(TransitionableEntity):
    """Provider profile attached to a caregiver account.

    The profile is keyed by the caregiver's user id. Its status is the
    document verification status; verifying the documents also activates
    the profile.
    """

    kind: ClassVar[EntityKind] = EntityKind.Caregiver

    status: VerificationStatus = Field(
        default=VerificationStatus.Pending,
        description="Document verification status",
    )
    name: str | None = Field(default=None, description="Caregiver display name")
    is_active: bool = Field(
        default=False,
        description="Whether the profile is listed in the marketplace",
    )
    verified_by: str | None = Field(
        default=None,
        description="Administrator who reviewed the documents",
    )
    verified_at: datetime | None = Field(default=None, description="Review timestamp")
    verification_notes: str | None = Field(default=None, description="Reviewer notes")

    def apply_status(
        self,
        status: str,
        reason: str | None = None,
        changed_by: str | None = None,
        changed_at: datetime | None = None,
    ) -> None:
        super().apply_status(status, reason, changed_by, changed_at)
        self.verified_by = changed_by
        self.verified_at = self.status_updated_at
        self.verification_notes = reason
        if self.status == VerificationStatus.Verified:
            self.is_active = True

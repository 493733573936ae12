"""User data model with UserStatus and UserRole enums."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field, field_validator

from caredesk.domain.models.entity import EntityKind, TransitionableEntity


class UserStatus(str, Enum):
    """Account statuses."""

    Active = "active"
    """Account can use the marketplace."""

    Suspended = "suspended"
    """Account is temporarily blocked by an administrator."""

    Banned = "banned"
    """Account is permanently blocked by an administrator."""

    Inactive = "inactive"
    """Account was soft-deleted."""


class UserRole(str, Enum):
    """Account roles."""

    Parent = "parent"
    Caregiver = "caregiver"
    Admin = "admin"
    SuperAdmin = "superadmin"


class User(TransitionableEntity):
    """A marketplace account.

    Besides the status itself, a status change records who applied it and
    why (``status_reason`` / ``status_updated_by``).
    """

    kind: ClassVar[EntityKind] = EntityKind.User

    status: UserStatus = Field(
        default=UserStatus.Active,
        description="Current account status",
    )
    email: str | None = Field(default=None, description="Account e-mail address")
    name: str | None = Field(default=None, description="Display name")
    role: UserRole = Field(default=UserRole.Parent, description="Account role")
    status_reason: str | None = Field(
        default=None,
        description="Reason given for the last status change",
    )
    status_updated_by: str | None = Field(
        default=None,
        description="Administrator who applied the last status change",
    )
    deleted_at: datetime | None = Field(default=None, description="Soft-delete timestamp")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        """Lowercase and strip e-mail addresses."""
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    @property
    def is_admin_account(self) -> bool:
        """True for admin and superadmin accounts."""
        return self.role in (UserRole.Admin, UserRole.SuperAdmin)

    def apply_status(
        self,
        status: str,
        reason: str | None = None,
        changed_by: str | None = None,
        changed_at: datetime | None = None,
    ) -> None:
        super().apply_status(status, reason, changed_by, changed_at)
        self.status_reason = reason
        self.status_updated_by = changed_by
        # Inactive is the soft-deleted state
        self.deleted_at = (
            self.status_updated_at if self.status == UserStatus.Inactive else None
        )

    def contact(self) -> tuple[str, str | None] | None:
        if not self.email:
            return None
        return self.email, self.name

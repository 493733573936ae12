"""StatusChange data model for the per-account status history."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from caredesk.domain.models.entity import EntityKind, utc_now


class StatusChange(BaseModel):
    """One entry in an account's status history.

    Unlike an AuditEntry, which describes the administrative action, a
    StatusChange only records the status the account ended up in.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    entity_kind: EntityKind = Field(default=EntityKind.User)
    entity_id: str = Field(..., description="Account whose status changed", min_length=1)
    status: str = Field(..., description="Status after the change")
    reason: str | None = Field(default=None, description="Reason given for the change")
    changed_by: str = Field(..., description="Administrator who made the change", min_length=1)
    changed_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)

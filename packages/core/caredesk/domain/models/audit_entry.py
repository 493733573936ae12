"""AuditEntry data model for the administrative audit trail."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from caredesk.domain.models.entity import EntityKind, utc_now


class AuditEntry(BaseModel):
    """Immutable record of a committed status transition.

    Exactly one AuditEntry is written per successful transition and none for
    a failed one. Entries are never mutated or deleted (compliance trail).
    """

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique audit entry identifier",
        min_length=1,
    )
    admin_id: str = Field(
        ...,
        description="Administrator who applied the transition",
        min_length=1,
    )
    action: str = Field(
        ...,
        description="Audit action name (e.g. 'APPROVE_JOB')",
        min_length=1,
    )
    entity_kind: EntityKind = Field(
        ...,
        description="Kind of the transitioned entity",
    )
    entity_id: str = Field(
        ...,
        description="Identifier of the transitioned entity",
        min_length=1,
    )
    from_status: str = Field(
        ...,
        description="Status observed before the transition",
    )
    to_status: str = Field(
        ...,
        description="Status written by the transition",
    )
    reason: str | None = Field(
        default=None,
        description="Free-text reason supplied with the request",
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="Time the transition committed",
    )

    model_config = ConfigDict(
        frozen=True,  # Immutable audit trail
        validate_assignment=True,
    )

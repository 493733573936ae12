"""TransitionRequest value objects."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caredesk.domain.models.entity import EntityKind, status_value


class TransitionTemplate(BaseModel):
    """Everything a transition needs except the entity id.

    Bulk operations apply one template to many entity ids; single-entity
    operations bind it to one id with :meth:`for_entity`.
    """

    entity_kind: EntityKind = Field(
        ...,
        description="Kind of entity being transitioned",
    )
    target_status: str = Field(
        ...,
        description="Requested status value",
        min_length=1,
    )
    acting_admin_id: str = Field(
        ...,
        description="Administrator requesting the transition",
        min_length=1,
    )
    audit_action: str = Field(
        ...,
        description="Audit action name recorded on success (e.g. 'APPROVE_JOB')",
        min_length=1,
    )
    reason: str | None = Field(
        default=None,
        description="Optional free-text reason",
    )
    allowed_current_statuses: frozenset[str] | None = Field(
        default=None,
        description="Statuses the entity may currently be in; None accepts any",
    )
    error_hint: str | None = Field(
        default=None,
        description="Message used when the guard denies the transition",
    )
    notify: bool = Field(
        default=True,
        description="Notify the affected party once the change is committed",
    )

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    @field_validator("target_status", mode="before")
    @classmethod
    def coerce_target_status(cls, v: Any) -> str:
        """Accept status enum members as well as raw strings."""
        return status_value(v)

    @field_validator("allowed_current_statuses", mode="before")
    @classmethod
    def coerce_allowed_statuses(cls, v: Any) -> frozenset[str] | None:
        """Normalize any iterable of statuses to a frozenset of raw values."""
        if v is None:
            return None
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, Iterable):
            raise ValueError("allowed_current_statuses must be an iterable of statuses")
        return frozenset(status_value(s) for s in v)

    @field_validator("reason")
    @classmethod
    def blank_reason_is_none(cls, v: str | None) -> str | None:
        """Treat an empty reason as no reason."""
        return v or None

    def for_entity(self, entity_id: str) -> "TransitionRequest":
        """Bind this template to a single entity id."""
        return TransitionRequest(entity_id=entity_id, **self.model_dump())


class TransitionRequest(TransitionTemplate):
    """Immutable request to move one entity to a new status."""

    entity_id: str = Field(
        ...,
        description="Identifier of the entity to transition",
        min_length=1,
    )

    def template(self) -> TransitionTemplate:
        """Return the request without its entity id."""
        return TransitionTemplate(**self.model_dump(exclude={"entity_id"}))

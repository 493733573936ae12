"""TransitionOperation: one declarative (entity kind x verb) contract."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from caredesk.domain.models.entity import EntityKind, status_value
from caredesk.domain.models.transition_request import TransitionTemplate


def _coerce_statuses(v: Any) -> Any:
    if v is None or isinstance(v, str) or not isinstance(v, Iterable):
        return v
    return [status_value(s) for s in v]


class TransitionOperation(BaseModel):
    """An administrative operation expressed as data.

    Fixed-target operations (approve, cancel, refund, ...) set
    ``target_status``. Direct-status operations leave it unset and instead
    list the ``allowed_targets`` the caller may request.
    """

    entity_kind: EntityKind
    name: str = Field(..., min_length=1, description="Operation verb (e.g. 'approve')")
    audit_action: str = Field(..., min_length=1)
    target_status: str | None = Field(
        default=None,
        description="Fixed target status; None for direct-status operations",
    )
    allowed_current_statuses: frozenset[str] | None = Field(
        default=None,
        description="Guard allow-list; None accepts any current status",
    )
    allowed_targets: tuple[str, ...] | None = Field(
        default=None,
        description="Statuses a direct-status operation may request",
    )
    error_hint: str | None = None
    denial_message: str | None = Field(
        default=None,
        description="Message used when the acting admin may not alter the entity",
    )
    fixed_reason: str | None = Field(
        default=None,
        description="Reason recorded instead of the caller's",
    )
    invalid_target_message: str = "Invalid status value"
    notify: bool = True

    model_config = ConfigDict(frozen=True)

    @field_validator("target_status", mode="before")
    @classmethod
    def coerce_target(cls, v: Any) -> Any:
        return None if v is None else status_value(v)

    @field_validator("allowed_current_statuses", "allowed_targets", mode="before")
    @classmethod
    def coerce_status_sets(cls, v: Any) -> Any:
        return _coerce_statuses(v)

    @model_validator(mode="after")
    def validate_target(self) -> "TransitionOperation":
        """Exactly one of target_status / allowed_targets must be set."""
        if (self.target_status is None) == (self.allowed_targets is None):
            raise ValueError(
                f"Operation {self.entity_kind.value}.{self.name} must define either "
                "target_status or allowed_targets"
            )
        return self

    @property
    def is_direct(self) -> bool:
        """True when the caller chooses the target status."""
        return self.target_status is None

    def template(
        self,
        acting_admin_id: str,
        reason: str | None = None,
        target_status: str | None = None,
    ) -> TransitionTemplate:
        """Build the transition template for this operation.

        Args:
            acting_admin_id: Administrator applying the operation.
            reason: Optional free-text reason; replaced by ``fixed_reason``
                when the operation defines one.
            target_status: Requested status for direct-status operations;
                ignored by fixed-target operations.
        """
        return TransitionTemplate(
            entity_kind=self.entity_kind,
            target_status=self.target_status or target_status,
            acting_admin_id=acting_admin_id,
            audit_action=self.audit_action,
            reason=self.fixed_reason or reason,
            allowed_current_statuses=self.allowed_current_statuses,
            error_hint=self.error_hint,
            notify=self.notify,
        )

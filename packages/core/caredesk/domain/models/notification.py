"""Status-change notification models."""

from pydantic import BaseModel, ConfigDict, Field

from caredesk.domain.models.entity import EntityKind


class StatusChangeNotice(BaseModel):
    """Message handed to a Notifier after a committed status change."""

    entity_kind: EntityKind
    entity_id: str = Field(..., min_length=1)
    recipient_email: str = Field(..., min_length=3)
    recipient_name: str | None = None
    status: str = Field(..., min_length=1)
    reason: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def subject(self) -> str:
        return f"Your account status is now {self.status}"

    def render_text(self) -> str:
        """Plain-text body of the notification."""
        greeting = f"Hello {self.recipient_name}," if self.recipient_name else "Hello,"
        lines = [
            greeting,
            "",
            f"An administrator changed your {self.entity_kind.value} status to "
            f"'{self.status}'.",
        ]
        if self.reason:
            lines.append(f"Reason: {self.reason}")
        return "\n".join(lines)


class NotificationResult(BaseModel):
    """Discardable outcome of a notification attempt."""

    attempted: bool = Field(default=False, description="Whether a notifier was called")
    delivered: bool = Field(default=False, description="Whether the notifier succeeded")
    error: str | None = Field(default=None, description="Failure message, if any")

    model_config = ConfigDict(frozen=True)

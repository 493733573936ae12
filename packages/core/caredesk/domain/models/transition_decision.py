"""TransitionDecision returned by the transition guard."""

from pydantic import BaseModel, ConfigDict, Field


class TransitionDecision(BaseModel):
    """Outcome of a guard check: allowed, or denied with a reason."""

    allowed: bool = Field(..., description="Whether the transition may proceed")
    reason: str | None = Field(
        default=None,
        description="Human-readable denial reason (None when allowed)",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def allow(cls) -> "TransitionDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "TransitionDecision":
        return cls(allowed=False, reason=reason)

    @property
    def denied(self) -> bool:
        return not self.allowed

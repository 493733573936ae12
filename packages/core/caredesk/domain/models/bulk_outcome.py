"""BulkOutcome returned by bulk transitions."""

from pydantic import BaseModel, Field, SerializeAsAny

from caredesk.domain.models.entity import TransitionableEntity


class FailedItem(BaseModel):
    """An id whose transition raised, with the error message."""

    id: str = Field(..., description="Entity identifier")
    reason: str = Field(..., description="Why the transition failed")


class BulkOutcome(BaseModel):
    """Result of applying one transition to many entity ids.

    Built fresh for every bulk call and never persisted. Ids skipped because
    they were missing or not permitted appear in neither list unless skipped
    items are configured to be reported.
    """

    succeeded: list[SerializeAsAny[TransitionableEntity]] = Field(
        default_factory=list,
        description="Updated entities, in iteration order",
    )
    failed_ids: list[FailedItem] = Field(
        default_factory=list,
        description="Ids whose transition failed, in iteration order",
    )
    processed_count: int = Field(
        default=0,
        description="Number of successfully transitioned entities",
        ge=0,
    )

    @property
    def failed_count(self) -> int:
        return len(self.failed_ids)

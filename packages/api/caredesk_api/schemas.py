"""Request bodies and response envelopes for the admin API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from caredesk.domain.models.entity import TransitionableEntity


class ReasonBody(BaseModel):
    """Optional body of the fixed-target action endpoints."""

    reason: str | None = Field(default=None, description="Why the action was taken")


class StatusUpdateBody(BaseModel):
    """Body of the direct-status endpoints."""

    status: str | None = Field(default=None, description="Requested status")
    reason: str | None = Field(default=None, description="Why the status was changed")


class BulkStatusBody(BaseModel):
    """Body of the bulk user status endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_ids: list[str] | None = Field(
        default=None,
        alias="userIds",
        description="Users to update",
    )
    status: str | None = Field(default=None, description="Requested status")
    reason: str | None = Field(default=None, description="Why the status was changed")


class DocumentVerificationBody(BaseModel):
    """Body of the caregiver document verification endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    verification_status: str | None = Field(
        default=None,
        alias="verificationStatus",
        description="pending, verified or rejected",
    )
    notes: str | None = Field(default=None, description="Reviewer notes")


def success(data: Any = None, message: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build the ``{success: true, data, message}`` envelope."""
    body: dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


def failure(error: str) -> dict[str, Any]:
    """Build the ``{success: false, error}`` envelope."""
    return {"success": False, "error": error}


def entity_payload(entity: TransitionableEntity) -> dict[str, Any]:
    return entity.model_dump(mode="json")

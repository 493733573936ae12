"""
Admin endpoints for account status management.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path

from caredesk.domain.models.entity import EntityKind
from caredesk_api.api.admin.common import (
    AdminDep,
    ManagerDep,
    fetch_entity,
    run_status_update,
)
from caredesk_api.schemas import (
    BulkStatusBody,
    DocumentVerificationBody,
    StatusUpdateBody,
    entity_payload,
    success,
)

router = APIRouter(prefix="/users", tags=["users"])

UserId = Annotated[str, Path(description="The ID of the user.")]


@router.post("/bulk/status")
@router.post("/bulk-status", include_in_schema=False)
async def bulk_update_user_status(
    body: Annotated[BulkStatusBody, Body()],
    manager: ManagerDep,
    admin: AdminDep,
) -> dict[str, Any]:
    """
    Set the status of many users at once.

    Missing users and admin accounts the caller may not modify are skipped.
    """
    outcome = await manager.bulk_transition(
        EntityKind.User,
        "bulk-status",
        body.user_ids,
        admin,
        reason=body.reason,
        status=body.status,
    )
    return success(
        {"processedCount": outcome.processed_count, "failedCount": outcome.failed_count},
        f"Bulk status update processed for {outcome.processed_count} users",
    )


@router.get("/{user_id}")
async def get_user(user_id: UserId, manager: ManagerDep, admin: AdminDep) -> dict[str, Any]:
    return await fetch_entity(manager, EntityKind.User, user_id)


@router.delete("/{user_id}")
async def delete_user(user_id: UserId, manager: ManagerDep, admin: AdminDep) -> dict[str, Any]:
    """
    Soft-delete a user by moving the account to ``inactive``.
    """
    user = await manager.transition(EntityKind.User, "delete", user_id, admin)
    return success(entity_payload(user), "User deleted successfully")


@router.patch("/{user_id}/status")
async def update_user_status(
    user_id: UserId,
    body: Annotated[StatusUpdateBody, Body()],
    manager: ManagerDep,
    admin: AdminDep,
) -> dict[str, Any]:
    """
    Activate, suspend or ban a user. The user is notified by e-mail.
    """
    return await run_status_update(manager, EntityKind.User, user_id, admin, body)


@router.get("/{user_id}/status-history")
async def get_user_status_history(
    user_id: UserId, manager: ManagerDep, admin: AdminDep
) -> dict[str, Any]:
    history = await manager.status_history(EntityKind.User, user_id)
    return success([change.model_dump(mode="json") for change in history])


@router.patch("/{user_id}/verification")
async def verify_caregiver_documents(
    user_id: UserId,
    body: Annotated[DocumentVerificationBody, Body()],
    manager: ManagerDep,
    admin: AdminDep,
) -> dict[str, Any]:
    """
    Record the outcome of a caregiver document review.

    Verifying the documents also activates the caregiver profile.
    """
    profile = await manager.transition(
        EntityKind.Caregiver,
        "verify-documents",
        user_id,
        admin,
        reason=body.notes,
        status=body.verification_status,
    )
    return success(
        entity_payload(profile),
        f"Documents {profile.status_value} successfully",
    )

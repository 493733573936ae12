"""
Admin endpoints for job moderation.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Path

from caredesk.domain.models.entity import EntityKind
from caredesk_api.api.admin.common import (
    AdminDep,
    ManagerDep,
    OptionalReasonBody,
    fetch_entity,
    run_action,
    run_status_update,
)
from caredesk_api.schemas import StatusUpdateBody

router = APIRouter(prefix="/jobs", tags=["jobs"])

JobId = Annotated[str, Path(description="The ID of the job.")]


@router.get("/{job_id}")
async def get_job(job_id: JobId, manager: ManagerDep, admin: AdminDep) -> dict[str, Any]:
    return await fetch_entity(manager, EntityKind.Job, job_id)


@router.patch("/{job_id}/status")
async def update_job_status(
    job_id: JobId,
    body: Annotated[StatusUpdateBody, Body()],
    manager: ManagerDep,
    admin: AdminDep,
) -> dict[str, Any]:
    """
    Set a job's status directly.
    """
    return await run_status_update(manager, EntityKind.Job, job_id, admin, body)


@router.post("/{job_id}/approve")
async def approve_job(
    job_id: JobId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager, EntityKind.Job, "approve", job_id, admin, "Job approved successfully", body
    )


@router.post("/{job_id}/reject")
async def reject_job(
    job_id: JobId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager, EntityKind.Job, "reject", job_id, admin, "Job rejected successfully", body
    )


@router.post("/{job_id}/cancel")
async def cancel_job(
    job_id: JobId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager, EntityKind.Job, "cancel", job_id, admin, "Job cancelled successfully", body
    )


@router.post("/{job_id}/complete")
async def complete_job(
    job_id: JobId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager, EntityKind.Job, "complete", job_id, admin, "Job marked as completed", body
    )


@router.post("/{job_id}/reopen")
async def reopen_job(
    job_id: JobId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager, EntityKind.Job, "reopen", job_id, admin, "Job reopened successfully", body
    )

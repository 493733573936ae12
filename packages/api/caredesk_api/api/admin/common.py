"""Shared dependency aliases and helpers for the admin routers."""

from typing import Annotated, Any

from fastapi import Body, Depends

from caredesk.domain.components.lifecycle_manager import LifecycleManager
from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.entity import EntityKind
from caredesk_api.dependencies import get_acting_admin, get_lifecycle_manager
from caredesk_api.schemas import ReasonBody, StatusUpdateBody, entity_payload, success

AdminDep = Annotated[AdminContext, Depends(get_acting_admin)]
ManagerDep = Annotated[LifecycleManager, Depends(get_lifecycle_manager)]
OptionalReasonBody = Annotated[ReasonBody | None, Body()]


async def run_action(
    manager: LifecycleManager,
    kind: EntityKind,
    operation: str,
    entity_id: str,
    admin: AdminContext,
    message: str,
    body: ReasonBody | None = None,
) -> dict[str, Any]:
    """Run a fixed-target catalog operation and wrap the result."""
    entity = await manager.transition(
        kind,
        operation,
        entity_id,
        admin,
        reason=body.reason if body else None,
    )
    return success(entity_payload(entity), message)


async def run_status_update(
    manager: LifecycleManager,
    kind: EntityKind,
    entity_id: str,
    admin: AdminContext,
    body: StatusUpdateBody,
) -> dict[str, Any]:
    """Run a direct-status operation and wrap the result."""
    entity = await manager.transition(
        kind,
        "status",
        entity_id,
        admin,
        reason=body.reason,
        status=body.status,
    )
    return success(
        entity_payload(entity),
        f"{kind.label} status updated to {entity.status_value}",
    )


async def fetch_entity(
    manager: LifecycleManager, kind: EntityKind, entity_id: str
) -> dict[str, Any]:
    entity = await manager.get_entity(kind, entity_id)
    return success(entity_payload(entity))

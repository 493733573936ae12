"""
Admin endpoint for browsing the audit trail.
"""

import math
from typing import Annotated, Any

from fastapi import APIRouter, Query

from caredesk.domain.interfaces.audit_store import AuditQuery
from caredesk.domain.models.entity import EntityKind
from caredesk_api.api.admin.common import AdminDep, ManagerDep

router = APIRouter(tags=["audit"])


@router.get("/audit")
@router.get("/audit-logs", include_in_schema=False)
async def list_audit_logs(
    manager: ManagerDep,
    admin: AdminDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    action: str | None = None,
    admin_id: Annotated[str | None, Query(alias="adminId")] = None,
    target_id: Annotated[str | None, Query(alias="targetId")] = None,
    entity_kind: Annotated[EntityKind | None, Query(alias="entityKind")] = None,
) -> dict[str, Any]:
    """
    List audit entries, newest first.
    """
    filters = AuditQuery(
        admin_id=admin_id,
        action=action,
        entity_kind=entity_kind,
        entity_id=target_id,
    )
    total = await manager.count_audit_entries(filters)
    entries = await manager.list_audit_entries(
        filters.model_copy(update={"limit": limit, "offset": (page - 1) * limit})
    )
    return {
        "success": True,
        "count": total,
        "totalPages": max(1, math.ceil(total / limit)),
        "currentPage": page,
        "data": [entry.model_dump(mode="json") for entry in entries],
    }

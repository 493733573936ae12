"""
Admin endpoints for payment settlement.
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

router = APIRouter(prefix="/payments", tags=["payments"])

PaymentId = Annotated[str, Path(description="The ID of the payment.")]


@router.get("/{payment_id}")
async def get_payment(
    payment_id: PaymentId, manager: ManagerDep, admin: AdminDep
) -> dict[str, Any]:
    return await fetch_entity(manager, EntityKind.Payment, payment_id)


@router.patch("/{payment_id}/status")
async def update_payment_status(
    payment_id: PaymentId,
    body: Annotated[StatusUpdateBody, Body()],
    manager: ManagerDep,
    admin: AdminDep,
) -> dict[str, Any]:
    return await run_status_update(manager, EntityKind.Payment, payment_id, admin, body)


@router.post("/{payment_id}/refund")
async def refund_payment(
    payment_id: PaymentId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    """
    Refund a paid or disputed payment.
    """
    return await run_action(
        manager,
        EntityKind.Payment,
        "refund",
        payment_id,
        admin,
        "Payment refunded successfully",
        body,
    )

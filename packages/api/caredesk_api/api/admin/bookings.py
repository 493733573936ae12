"""
Admin endpoints for booking lifecycle management.
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

router = APIRouter(prefix="/bookings", tags=["bookings"])

BookingId = Annotated[str, Path(description="The ID of the booking.")]


@router.get("/{booking_id}")
async def get_booking(
    booking_id: BookingId, manager: ManagerDep, admin: AdminDep
) -> dict[str, Any]:
    return await fetch_entity(manager, EntityKind.Booking, booking_id)


@router.patch("/{booking_id}/status")
async def update_booking_status(
    booking_id: BookingId,
    body: Annotated[StatusUpdateBody, Body()],
    manager: ManagerDep,
    admin: AdminDep,
) -> dict[str, Any]:
    """
    Set a booking's status directly.
    """
    return await run_status_update(manager, EntityKind.Booking, booking_id, admin, body)


@router.post("/{booking_id}/confirm")
async def confirm_booking(
    booking_id: BookingId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager,
        EntityKind.Booking,
        "confirm",
        booking_id,
        admin,
        "Booking confirmed successfully",
        body,
    )


@router.post("/{booking_id}/start")
async def start_booking(
    booking_id: BookingId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager,
        EntityKind.Booking,
        "start",
        booking_id,
        admin,
        "Booking marked as in progress",
        body,
    )


@router.post("/{booking_id}/complete")
async def complete_booking(
    booking_id: BookingId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager,
        EntityKind.Booking,
        "complete",
        booking_id,
        admin,
        "Booking marked as completed",
        body,
    )


@router.post("/{booking_id}/cancel")
async def cancel_booking(
    booking_id: BookingId, manager: ManagerDep, admin: AdminDep, body: OptionalReasonBody = None
) -> dict[str, Any]:
    return await run_action(
        manager,
        EntityKind.Booking,
        "cancel",
        booking_id,
        admin,
        "Booking cancelled successfully",
        body,
    )

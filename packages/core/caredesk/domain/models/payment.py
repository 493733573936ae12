"""Payment data model and PaymentStatus enum."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar

from pydantic import Field

from caredesk.domain.models.entity import EntityKind, TransitionableEntity


class PaymentStatus(str, Enum):
    """Settlement statuses of a payment."""

    Pending = "pending"
    """Payment initiated, not yet settled."""

    Paid = "paid"
    """Payment settled."""

    Refunded = "refunded"
    """Payment returned to the parent."""

    Disputed = "disputed"
    """Payment is contested by one of the parties."""


class Payment(TransitionableEntity):
    """A payment attached to a booking."""

    kind: ClassVar[EntityKind] = EntityKind.Payment

    status: PaymentStatus = Field(
        default=PaymentStatus.Pending,
        description="Current settlement status",
    )
    booking_id: str | None = Field(default=None, description="Booking being paid for")
    parent_id: str | None = Field(default=None, description="Paying parent user id")
    caregiver_id: str | None = Field(default=None, description="Receiving caregiver user id")
    total_amount: Decimal = Field(
        default=Decimal("0"),
        description="Total amount charged",
        ge=0,
    )
    notes: str | None = Field(default=None, description="Administrator notes")
    refund_reason: str | None = Field(
        default=None,
        description="Reason recorded when the payment was refunded",
    )

    def apply_status(
        self,
        status: str,
        reason: str | None = None,
        changed_by: str | None = None,
        changed_at: datetime | None = None,
    ) -> None:
        super().apply_status(status, reason, changed_by, changed_at)
        if self.status == PaymentStatus.Refunded:
            self.refund_reason = reason
        elif reason is not None:
            self.notes = reason

"""Declarative catalog of administrative status operations.

Each (entity kind, operation name) pair maps to one immutable
TransitionOperation. The catalog is data only; the guard and executor
interpret it generically.
"""

from caredesk.domain.models.booking import BookingStatus
from caredesk.domain.models.caregiver_profile import VerificationStatus
from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.job import JobStatus
from caredesk.domain.models.payment import PaymentStatus
from caredesk.domain.models.transition_error import InvalidArgumentError
from caredesk.domain.models.transition_operation import TransitionOperation
from caredesk.domain.models.user import UserStatus

# Statuses an administrator may set on a user directly
USER_ADMIN_STATUSES = (UserStatus.Active, UserStatus.Suspended, UserStatus.Banned)

_OPERATIONS: tuple[TransitionOperation, ...] = (
    # Jobs
    TransitionOperation(
        entity_kind=EntityKind.Job,
        name="approve",
        audit_action="APPROVE_JOB",
        target_status=JobStatus.Confirmed,
        allowed_current_statuses=[JobStatus.Pending, JobStatus.Open, JobStatus.Active],
        error_hint="Only pending or open jobs can be approved",
    ),
    TransitionOperation(
        entity_kind=EntityKind.Job,
        name="reject",
        audit_action="REJECT_JOB",
        target_status=JobStatus.Cancelled,
        allowed_current_statuses=[JobStatus.Pending, JobStatus.Open, JobStatus.Active],
        error_hint="Only pending or open jobs can be rejected",
    ),
    TransitionOperation(
        entity_kind=EntityKind.Job,
        name="cancel",
        audit_action="CANCEL_JOB",
        target_status=JobStatus.Cancelled,
        allowed_current_statuses=[
            JobStatus.Open,
            JobStatus.Confirmed,
            JobStatus.Pending,
            JobStatus.Active,
        ],
        error_hint="Only active jobs can be cancelled",
    ),
    TransitionOperation(
        entity_kind=EntityKind.Job,
        name="complete",
        audit_action="COMPLETE_JOB",
        target_status=JobStatus.Completed,
        allowed_current_statuses=[JobStatus.Confirmed, JobStatus.Open, JobStatus.Active],
    ),
    TransitionOperation(
        entity_kind=EntityKind.Job,
        name="reopen",
        audit_action="REOPEN_JOB",
        target_status=JobStatus.Open,
        allowed_current_statuses=[
            JobStatus.Cancelled,
            JobStatus.Completed,
            JobStatus.Inactive,
        ],
    ),
    TransitionOperation(
        entity_kind=EntityKind.Job,
        name="status",
        audit_action="UPDATE_JOB_STATUS",
        allowed_targets=[
            JobStatus.Open,
            JobStatus.Pending,
            JobStatus.Confirmed,
            JobStatus.Completed,
            JobStatus.Cancelled,
        ],
    ),
    # Bookings
    TransitionOperation(
        entity_kind=EntityKind.Booking,
        name="confirm",
        audit_action="CONFIRM_BOOKING",
        target_status=BookingStatus.Confirmed,
        allowed_current_statuses=[BookingStatus.Pending],
        error_hint="Only pending bookings can be confirmed",
    ),
    TransitionOperation(
        entity_kind=EntityKind.Booking,
        name="start",
        audit_action="START_BOOKING",
        target_status=BookingStatus.InProgress,
        allowed_current_statuses=[BookingStatus.Confirmed],
    ),
    TransitionOperation(
        entity_kind=EntityKind.Booking,
        name="complete",
        audit_action="COMPLETE_BOOKING",
        target_status=BookingStatus.Completed,
        allowed_current_statuses=[BookingStatus.InProgress, BookingStatus.Confirmed],
    ),
    TransitionOperation(
        entity_kind=EntityKind.Booking,
        name="cancel",
        audit_action="CANCEL_BOOKING",
        target_status=BookingStatus.Cancelled,
        allowed_current_statuses=[
            BookingStatus.Pending,
            BookingStatus.Confirmed,
            BookingStatus.InProgress,
        ],
        error_hint="Only active bookings can be cancelled",
    ),
    TransitionOperation(
        entity_kind=EntityKind.Booking,
        name="status",
        audit_action="UPDATE_BOOKING_STATUS",
        allowed_targets=list(BookingStatus),
    ),
    # Users
    TransitionOperation(
        entity_kind=EntityKind.User,
        name="status",
        audit_action="UPDATE_USER_STATUS",
        allowed_targets=USER_ADMIN_STATUSES,
    ),
    TransitionOperation(
        entity_kind=EntityKind.User,
        name="bulk-status",
        audit_action="BULK_UPDATE_USER_STATUS",
        allowed_targets=USER_ADMIN_STATUSES,
    ),
    TransitionOperation(
        entity_kind=EntityKind.User,
        name="delete",
        audit_action="DELETE_USER",
        target_status=UserStatus.Inactive,
        denial_message="Cannot delete admin accounts",
        fixed_reason="Account deleted by administrator",
        notify=False,
    ),
    # Caregiver profiles
    TransitionOperation(
        entity_kind=EntityKind.Caregiver,
        name="verify-documents",
        audit_action="VERIFY_PROVIDER_DOCUMENTS",
        allowed_targets=list(VerificationStatus),
        invalid_target_message="Invalid verification status",
        notify=False,
    ),
    # Payments
    TransitionOperation(
        entity_kind=EntityKind.Payment,
        name="refund",
        audit_action="REFUND_PAYMENT",
        target_status=PaymentStatus.Refunded,
        allowed_current_statuses=[PaymentStatus.Paid, PaymentStatus.Disputed],
        error_hint="Only paid or disputed payments can be refunded",
    ),
    TransitionOperation(
        entity_kind=EntityKind.Payment,
        name="status",
        audit_action="UPDATE_PAYMENT_STATUS",
        allowed_targets=list(PaymentStatus),
    ),
)

OPERATIONS: dict[tuple[EntityKind, str], TransitionOperation] = {
    (op.entity_kind, op.name): op for op in _OPERATIONS
}


def get_operation(kind: EntityKind | str, name: str) -> TransitionOperation:
    """Look up a catalog operation.

    Args:
        kind: Entity kind (enum member or raw value such as "job").
        name: Operation name (e.g. "approve", "status").

    Returns:
        The matching TransitionOperation.

    Raises:
        InvalidArgumentError: If the kind or operation is unknown.
    """
    try:
        entity_kind = EntityKind(kind)
    except ValueError:
        raise InvalidArgumentError(f"Unknown entity kind: {kind}") from None

    operation = OPERATIONS.get((entity_kind, name))
    if operation is None:
        raise InvalidArgumentError(
            f"Unknown {entity_kind.value} operation: {name}",
            details={"entity_kind": entity_kind.value, "operation": name},
        )
    return operation


def operations_for(kind: EntityKind) -> list[TransitionOperation]:
    """Return every catalog operation for an entity kind, in catalog order."""
    return [op for op in _OPERATIONS if op.entity_kind == kind]

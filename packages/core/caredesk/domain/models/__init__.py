"""Domain models for the caredesk back office."""

from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.audit_entry import AuditEntry
from caredesk.domain.models.booking import Booking, BookingStatus
from caredesk.domain.models.bulk_outcome import BulkOutcome, FailedItem
from caredesk.domain.models.caregiver_profile import CaregiverProfile, VerificationStatus
from caredesk.domain.models.entity import EntityKind, TransitionableEntity
from caredesk.domain.models.job import Job, JobStatus
from caredesk.domain.models.notification import NotificationResult, StatusChangeNotice
from caredesk.domain.models.payment import Payment, PaymentStatus
from caredesk.domain.models.status_change import StatusChange
from caredesk.domain.models.transition_decision import TransitionDecision
from caredesk.domain.models.transition_error import (
    EntityNotFoundError,
    ErrorCategory,
    InvalidArgumentError,
    InvalidTransitionError,
    TransitionError,
    UnauthorizedTransitionError,
)
from caredesk.domain.models.transition_operation import TransitionOperation
from caredesk.domain.models.transition_request import (
    TransitionRequest,
    TransitionTemplate,
)
from caredesk.domain.models.user import User, UserRole, UserStatus

__all__ = [
    "AdminContext",
    "AuditEntry",
    "Booking",
    "BookingStatus",
    "BulkOutcome",
    "FailedItem",
    "CaregiverProfile",
    "VerificationStatus",
    "EntityKind",
    "TransitionableEntity",
    "Job",
    "JobStatus",
    "NotificationResult",
    "StatusChangeNotice",
    "Payment",
    "PaymentStatus",
    "StatusChange",
    "TransitionDecision",
    "ErrorCategory",
    "TransitionError",
    "EntityNotFoundError",
    "InvalidTransitionError",
    "UnauthorizedTransitionError",
    "InvalidArgumentError",
    "TransitionOperation",
    "TransitionRequest",
    "TransitionTemplate",
    "User",
    "UserRole",
    "UserStatus",
]

"""Domain components."""

from caredesk.domain.components.audit_recorder import AuditRecorder
from caredesk.domain.components.bulk_transition_runner import BulkTransitionRunner
from caredesk.domain.components.lifecycle_manager import LifecycleManager
from caredesk.domain.components.notification_dispatcher import NotificationDispatcher
from caredesk.domain.components.operation_catalog import OPERATIONS, get_operation
from caredesk.domain.components.transition_executor import TransitionExecutor
from caredesk.domain.components.transition_guard import TransitionGuard

__all__ = [
    "AuditRecorder",
    "BulkTransitionRunner",
    "LifecycleManager",
    "NotificationDispatcher",
    "OPERATIONS",
    "get_operation",
    "TransitionExecutor",
    "TransitionGuard",
]

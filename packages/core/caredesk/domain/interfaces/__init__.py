"""Domain interfaces for dependency injection."""

from caredesk.domain.interfaces.audit_store import (
    AuditQuery,
    AuditStore,
    AuditStoreError,
)
from caredesk.domain.interfaces.entity_repository import (
    EntityRepository,
    RepositoryError,
)
from caredesk.domain.interfaces.notifier import NotificationError, Notifier
from caredesk.domain.interfaces.observability_manager import (
    ObservabilityError,
    ObservabilityManager,
)
from caredesk.domain.interfaces.status_history_store import (
    StatusHistoryError,
    StatusHistoryStore,
)

__all__ = [
    "AuditQuery",
    "AuditStore",
    "AuditStoreError",
    "EntityRepository",
    "RepositoryError",
    "NotificationError",
    "Notifier",
    "ObservabilityError",
    "ObservabilityManager",
    "StatusHistoryError",
    "StatusHistoryStore",
]

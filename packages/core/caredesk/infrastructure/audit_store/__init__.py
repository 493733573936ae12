"""Audit trail and status history store implementations."""

from caredesk.infrastructure.audit_store.memory_audit_store import InMemoryAuditStore
from caredesk.infrastructure.audit_store.memory_history_store import (
    InMemoryStatusHistoryStore,
)
from caredesk.infrastructure.audit_store.mongo_audit_store import MongoAuditStore
from caredesk.infrastructure.audit_store.mongo_history_store import (
    MongoStatusHistoryStore,
)

__all__ = [
    "InMemoryAuditStore",
    "InMemoryStatusHistoryStore",
    "MongoAuditStore",
    "MongoStatusHistoryStore",
]

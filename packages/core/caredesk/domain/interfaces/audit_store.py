"""AuditStore interface for the append-only administrative audit trail.

Example:
    ```python
    from caredesk.infrastructure.audit_store.memory_audit_store import (
        InMemoryAuditStore,
    )

    store: AuditStore = InMemoryAuditStore()
    await store.append(entry)

    # Most recent approvals by one administrator
    query = AuditQuery(admin_id="admin-1", action="APPROVE_JOB", limit=20)
    entries = await store.query(query)
    ```
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caredesk.domain.models.audit_entry import AuditEntry
from caredesk.domain.models.entity import EntityKind


class AuditQuery(BaseModel):
    """Filter criteria for audit trail queries.

    All filters are optional and combined with AND. Results are ordered
    newest first.

    Attributes:
        admin_id: Only entries written by this administrator.
        action: Only entries with this audit action (e.g. "CANCEL_BOOKING").
        entity_kind: Only entries about this kind of entity.
        entity_id: Only entries about this entity.
        timestamp_from: Start of timestamp range filter (inclusive).
        timestamp_to: End of timestamp range filter (inclusive).
        limit: Maximum number of results to return.
        offset: Number of results to skip.
    """

    admin_id: str | None = Field(default=None, description="Filter by acting administrator")
    action: str | None = Field(default=None, description="Filter by audit action")
    entity_kind: EntityKind | None = Field(default=None, description="Filter by entity kind")
    entity_id: str | None = Field(default=None, description="Filter by entity id")
    timestamp_from: datetime | None = Field(
        default=None,
        description="Start of timestamp range filter",
    )
    timestamp_to: datetime | None = Field(
        default=None,
        description="End of timestamp range filter",
    )
    limit: int | None = Field(
        default=None,
        description="Maximum number of results to return",
        ge=1,
    )
    offset: int | None = Field(
        default=None,
        description="Number of results to skip",
        ge=0,
    )

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    @field_validator("timestamp_from", "timestamp_to")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC so they compare with stored entries."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    def matches(self, entry: AuditEntry) -> bool:
        """Check whether an entry satisfies every filter in this query."""
        if self.admin_id is not None and entry.admin_id != self.admin_id:
            return False
        if self.action is not None and entry.action != self.action:
            return False
        if self.entity_kind is not None and entry.entity_kind != self.entity_kind:
            return False
        if self.entity_id is not None and entry.entity_id != self.entity_id:
            return False
        if self.timestamp_from is not None and entry.timestamp < self.timestamp_from:
            return False
        return not (self.timestamp_to is not None and entry.timestamp > self.timestamp_to)


class AuditStore(ABC):
    """Abstract append-only store for AuditEntry records.

    Stores never update or delete entries. Implementations raise
    AuditStoreError for operation failures; the AuditRecorder is responsible
    for keeping those failures away from callers of the transition engine.
    """

    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        """Append an entry to the audit trail.

        Args:
            entry: The AuditEntry to store.

        Raises:
            AuditStoreError: If the write fails.
        """
        pass

    @abstractmethod
    async def query(self, query: AuditQuery) -> list[AuditEntry]:
        """Return entries matching the query, newest first.

        Args:
            query: Filter criteria and pagination options.

        Returns:
            Matching entries.

        Raises:
            AuditStoreError: If the query fails.
        """
        pass

    @abstractmethod
    async def count(self, query: AuditQuery) -> int:
        """Count entries matching the query, ignoring limit and offset.

        Raises:
            AuditStoreError: If the count fails.
        """
        pass


class AuditStoreError(Exception):
    """Raised when AuditStore operations fail."""

    pass

"""AuditRecorder: best-effort writer for the audit trail and status history."""

from collections.abc import Awaitable, Callable
from typing import Any

from caredesk.domain.interfaces.audit_store import AuditStore
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.interfaces.status_history_store import StatusHistoryStore
from caredesk.domain.models.audit_entry import AuditEntry
from caredesk.domain.models.status_change import StatusChange


class AuditRecorder:
    """Appends AuditEntry and StatusChange records without ever failing the caller.

    Records are written after the entity update has been committed. A
    failed write is retried against the store, and a persistent failure is
    logged and swallowed.
    """

    def __init__(
        self,
        audit_store: AuditStore,
        observability_manager: ObservabilityManager,
        max_attempts: int = 2,
        history_store: StatusHistoryStore | None = None,
    ) -> None:
        """Initialize AuditRecorder.

        Args:
            audit_store: Store the entries are appended to.
            observability_manager: Used to report write failures.
            max_attempts: Total write attempts per record (2 = one retry).
            history_store: Optional store for per-account status history.
                None disables status history.
        """
        self._audit_store = audit_store
        self._history_store = history_store
        self._observability = observability_manager
        self._max_attempts = max(1, max_attempts)

    @property
    def audit_store(self) -> AuditStore:
        return self._audit_store

    @property
    def history_store(self) -> StatusHistoryStore | None:
        return self._history_store

    async def record(self, entry: AuditEntry) -> bool:
        """Append an entry to the audit trail.

        Args:
            entry: The entry to append.

        Returns:
            True if the entry was written, False if every attempt failed.
        """
        return await self._write(
            lambda: self._audit_store.append(entry),
            "audit entry",
            {
                "audit_id": entry.id,
                "action": entry.action,
                "entity_kind": entry.entity_kind.value,
                "entity_id": entry.entity_id,
            },
        )

    async def record_status_change(self, change: StatusChange) -> bool:
        """Append a change to the status history.

        Returns:
            True if the change was written, False if history is disabled or
            every attempt failed.
        """
        if self._history_store is None:
            return False

        history_store = self._history_store
        return await self._write(
            lambda: history_store.append(change),
            "status change",
            {
                "change_id": change.id,
                "entity_kind": change.entity_kind.value,
                "entity_id": change.entity_id,
                "status": change.status,
            },
        )

    async def _write(
        self,
        write: Callable[[], Awaitable[None]],
        label: str,
        context: dict[str, Any],
    ) -> bool:
        last_error: Exception | None = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                await write()
                return True
            except Exception as e:
                last_error = e
                await self._safe_log(
                    "WARNING",
                    f"Write attempt {attempt} for {label} failed: {e}",
                    {**context, "attempt": attempt},
                )

        await self._safe_log(
            "ERROR",
            f"Failed to record {label} after {self._max_attempts} attempts: {last_error}",
            context,
        )
        return False

    async def _safe_log(self, level: str, message: str, context: dict[str, Any]) -> None:
        try:
            await self._observability.log(level=level, message=message, context=context)
        except Exception:
            # Nothing left to report to
            pass

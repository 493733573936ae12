"""In-memory audit store implementation."""

import asyncio

from caredesk.domain.interfaces.audit_store import (
    AuditQuery,
    AuditStore,
    AuditStoreError,
)
from caredesk.domain.models.audit_entry import AuditEntry


class InMemoryAuditStore(AuditStore):
    """Append-only audit store kept in a Python list.

    Entries are kept in commit order and are never removed or replaced.

    Thread Safety:
        - ``append`` uses an asyncio.Lock
        - ``query`` works on a snapshot of the list
    """

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []
        self._write_lock = asyncio.Lock()

    async def append(self, entry: AuditEntry) -> None:
        try:
            async with self._write_lock:
                self._entries.append(entry)
        except Exception as e:
            raise AuditStoreError(f"Failed to append audit entry {entry.id}: {e}") from e

    async def query(self, query: AuditQuery) -> list[AuditEntry]:
        try:
            snapshot = list(self._entries)
            # Newest first; insertion order breaks timestamp ties
            matches = [entry for entry in reversed(snapshot) if query.matches(entry)]
            matches.sort(key=lambda entry: entry.timestamp, reverse=True)

            offset = query.offset or 0
            if query.limit is not None:
                return matches[offset : offset + query.limit]
            return matches[offset:]
        except Exception as e:
            raise AuditStoreError(f"Failed to query audit entries: {e}") from e

    async def count(self, query: AuditQuery | None = None) -> int:
        if query is None:
            return len(self._entries)
        return sum(1 for entry in list(self._entries) if query.matches(entry))

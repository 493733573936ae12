"""In-memory status history store implementation."""

import asyncio

from caredesk.domain.interfaces.status_history_store import (
    StatusHistoryError,
    StatusHistoryStore,
)
from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.status_change import StatusChange


class InMemoryStatusHistoryStore(StatusHistoryStore):
    """Status history kept per (kind, id) in a dict of lists."""

    def __init__(self) -> None:
        self._changes: dict[tuple[EntityKind, str], list[StatusChange]] = {}
        self._write_lock = asyncio.Lock()

    async def append(self, change: StatusChange) -> None:
        try:
            async with self._write_lock:
                key = (change.entity_kind, change.entity_id)
                self._changes.setdefault(key, []).append(change)
        except Exception as e:
            raise StatusHistoryError(f"Failed to record status change {change.id}: {e}") from e

    async def history(self, entity_kind: EntityKind, entity_id: str) -> list[StatusChange]:
        return list(reversed(self._changes.get((entity_kind, entity_id), [])))

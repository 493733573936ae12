"""StatusHistoryStore interface for per-account status history."""

from abc import ABC, abstractmethod

from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.status_change import StatusChange


class StatusHistoryStore(ABC):
    """Abstract append-only store for StatusChange records.

    Implementations raise StatusHistoryError for operation failures.
    """

    @abstractmethod
    async def append(self, change: StatusChange) -> None:
        """Record a status change.

        Raises:
            StatusHistoryError: If the write fails.
        """
        pass

    @abstractmethod
    async def history(self, entity_kind: EntityKind, entity_id: str) -> list[StatusChange]:
        """Return the status changes of one entity, newest first.

        Raises:
            StatusHistoryError: If the read fails.
        """
        pass


class StatusHistoryError(Exception):
    """Raised when StatusHistoryStore operations fail."""

    pass

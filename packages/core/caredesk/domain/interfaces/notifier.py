"""Notifier interface for status-change messages."""

from abc import ABC, abstractmethod

from caredesk.domain.models.notification import StatusChangeNotice


class Notifier(ABC):
    """Delivers a human-readable status-change message to the affected party.

    Notifiers may raise; the transition engine never calls them directly but
    goes through NotificationDispatcher, which absorbs every failure.
    """

    @abstractmethod
    async def send_status_change(self, notice: StatusChangeNotice) -> None:
        """Deliver a status-change notice.

        Args:
            notice: What changed and who to tell.

        Raises:
            NotificationError: If delivery fails.
        """
        pass


class NotificationError(Exception):
    """Raised when a notifier cannot deliver a message."""

    pass

"""NotificationDispatcher: the only path from the engine to a Notifier."""

from caredesk.domain.interfaces.notifier import Notifier
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.models.entity import TransitionableEntity
from caredesk.domain.models.notification import NotificationResult, StatusChangeNotice


class NotificationDispatcher:
    """Wraps a Notifier; delivery never fails a transition.

    ``dispatch`` is the single entry point and always returns a
    NotificationResult; any exception raised by the notifier is caught,
    logged as a warning and reported in the result.
    """

    def __init__(
        self,
        notifier: Notifier | None,
        observability_manager: ObservabilityManager,
    ) -> None:
        """Initialize NotificationDispatcher.

        Args:
            notifier: Notifier to deliver through. None disables notifications.
            observability_manager: Used to report delivery failures.
        """
        self._notifier = notifier
        self._observability = observability_manager

    async def dispatch(
        self,
        entity: TransitionableEntity,
        status: str,
        reason: str | None = None,
    ) -> NotificationResult:
        """Notify the party behind ``entity`` of its new status.

        Args:
            entity: The entity whose status changed.
            status: The new status value.
            reason: Optional reason given by the administrator.

        Returns:
            NotificationResult. ``attempted`` is False when notifications are
            disabled or the entity has no contact address.
        """
        if self._notifier is None:
            return NotificationResult()

        contact = entity.contact()
        if contact is None:
            return NotificationResult()

        email, name = contact
        try:
            notice = StatusChangeNotice(
                entity_kind=entity.kind,
                entity_id=entity.id,
                recipient_email=email,
                recipient_name=name,
                status=status,
                reason=reason,
            )
            await self._notifier.send_status_change(notice)
            return NotificationResult(attempted=True, delivered=True)
        except Exception as e:
            try:
                await self._observability.log(
                    level="WARNING",
                    message=f"Failed to send status notification: {e}",
                    context={
                        "entity_kind": entity.kind.value,
                        "entity_id": entity.id,
                        "status": status,
                    },
                )
            except Exception:
                pass
            return NotificationResult(attempted=True, delivered=False, error=str(e))

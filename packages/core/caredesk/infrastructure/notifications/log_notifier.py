"""Notifier that writes notices to the structured log."""

import structlog

from caredesk.domain.interfaces.notifier import Notifier
from caredesk.domain.models.notification import StatusChangeNotice
from caredesk.infrastructure.observability.logger import mask_email

logger = structlog.get_logger(__name__)


class LogNotifier(Notifier):
    """Default notifier for development: logs each notice instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[StatusChangeNotice] = []

    async def send_status_change(self, notice: StatusChangeNotice) -> None:
        self.sent.append(notice)
        logger.info(
            "status_change_notification",
            recipient=mask_email(notice.recipient_email),
            entity_kind=notice.entity_kind.value,
            entity_id=notice.entity_id,
            status=notice.status,
            subject=notice.subject,
        )

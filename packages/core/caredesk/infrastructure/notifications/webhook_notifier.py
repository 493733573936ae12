"""Webhook notifier: posts status-change notices to an HTTP endpoint."""

import httpx

from caredesk.domain.interfaces.notifier import NotificationError, Notifier
from caredesk.domain.models.notification import StatusChangeNotice


class WebhookNotifier(Notifier):
    """Delivers notices by POSTing JSON to a mail or messaging gateway.

    The payload carries the recipient, subject and rendered text body so
    the receiving service only has to send it:

        {"to": ..., "name": ..., "subject": ..., "text": ...,
         "entity_kind": ..., "entity_id": ..., "status": ..., "reason": ...}
    """

    TIMEOUT = 5.0
    """Request timeout in seconds."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize WebhookNotifier.

        Args:
            url: Endpoint to POST notices to.
            timeout: Optional timeout override in seconds.
            headers: Extra request headers (e.g. an auth token).
        """
        if not url:
            raise ValueError("Webhook URL cannot be empty")
        self.url = url
        self.timeout = timeout or self.TIMEOUT
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def build_payload(self, notice: StatusChangeNotice) -> dict[str, str | None]:
        return {
            "to": notice.recipient_email,
            "name": notice.recipient_name,
            "subject": notice.subject,
            "text": notice.render_text(),
            "entity_kind": notice.entity_kind.value,
            "entity_id": notice.entity_id,
            "status": notice.status,
            "reason": notice.reason,
        }

    async def send_status_change(self, notice: StatusChangeNotice) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.url,
                    json=self.build_payload(notice),
                    headers=self.headers,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"Notification endpoint returned {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise NotificationError(
                f"Notification request timed out after {self.timeout}s"
            ) from e
        except httpx.NetworkError as e:
            raise NotificationError(f"Network error sending notification: {e}") from e
        except Exception as e:
            raise NotificationError(f"Unexpected error sending notification: {e}") from e

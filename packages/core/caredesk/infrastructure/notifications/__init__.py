"""Notifier implementations."""

from caredesk.infrastructure.notifications.log_notifier import LogNotifier
from caredesk.infrastructure.notifications.webhook_notifier import WebhookNotifier

__all__ = ["LogNotifier", "WebhookNotifier"]

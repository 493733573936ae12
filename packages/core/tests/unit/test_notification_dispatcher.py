"""Tests for NotificationDispatcher component."""

import pytest

from caredesk.domain.components.notification_dispatcher import NotificationDispatcher
from caredesk.domain.interfaces.notifier import NotificationError, Notifier
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.models.job import Job
from caredesk.domain.models.notification import StatusChangeNotice
from caredesk.domain.models.user import User, UserStatus


class MockObservabilityManager(ObservabilityManager):
    """Mock ObservabilityManager for testing."""

    def __init__(self) -> None:
        self.logs: list[dict] = []
        self.error: Exception | None = None

    async def emit_event(
        self,
        event_type: str,
        payload: dict,
        metadata: dict | None = None,
    ) -> None:
        pass

    async def log(
        self,
        level: str,
        message: str,
        context: dict | None = None,
    ) -> None:
        if self.error:
            raise self.error
        self.logs.append({"level": level, "message": message, "context": context or {}})


class MockNotifier(Notifier):
    """Mock Notifier for testing."""

    def __init__(self, error: Exception | None = None) -> None:
        self.notices: list[StatusChangeNotice] = []
        self.error = error

    async def send_status_change(self, notice: StatusChangeNotice) -> None:
        if self.error:
            raise self.error
        self.notices.append(notice)


class TestNotificationDispatcher:
    """Tests for failure-absorbing notification delivery."""

    def setup_method(self) -> None:
        self.observability = MockObservabilityManager()
        self.user = User(
            id="u1",
            status=UserStatus.Suspended,
            email="Parent.One@Example.com",
            name="Parent One",
        )

    @pytest.mark.asyncio
    async def test_dispatch_delivers_notice(self) -> None:
        notifier = MockNotifier()
        dispatcher = NotificationDispatcher(notifier, self.observability)

        result = await dispatcher.dispatch(self.user, "suspended", "Chargeback")

        assert result.attempted is True
        assert result.delivered is True
        assert result.error is None
        notice = notifier.notices[0]
        assert notice.recipient_email == "parent.one@example.com"
        assert notice.recipient_name == "Parent One"
        assert notice.subject == "Your account status is now suspended"
        assert "Reason: Chargeback" in notice.render_text()

    @pytest.mark.asyncio
    async def test_dispatch_absorbs_notifier_errors(self) -> None:
        """Test that a throwing notifier is reported, never raised."""
        notifier = MockNotifier(error=NotificationError("smtp down"))
        dispatcher = NotificationDispatcher(notifier, self.observability)

        result = await dispatcher.dispatch(self.user, "suspended")

        assert result.attempted is True
        assert result.delivered is False
        assert result.error == "smtp down"
        assert self.observability.logs[0]["level"] == "WARNING"
        assert "smtp down" in self.observability.logs[0]["message"]

    @pytest.mark.asyncio
    async def test_dispatch_absorbs_unexpected_errors(self) -> None:
        notifier = MockNotifier(error=RuntimeError("boom"))
        dispatcher = NotificationDispatcher(notifier, self.observability)

        result = await dispatcher.dispatch(self.user, "banned")

        assert result.delivered is False

    @pytest.mark.asyncio
    async def test_dispatch_survives_raising_logger(self) -> None:
        self.observability.error = RuntimeError("log sink down")
        notifier = MockNotifier(error=NotificationError("smtp down"))
        dispatcher = NotificationDispatcher(notifier, self.observability)

        result = await dispatcher.dispatch(self.user, "suspended")

        assert result.attempted is True
        assert result.delivered is False
        assert result.error == "smtp down"

    @pytest.mark.asyncio
    async def test_dispatch_without_notifier(self) -> None:
        dispatcher = NotificationDispatcher(None, self.observability)

        result = await dispatcher.dispatch(self.user, "suspended")

        assert result.attempted is False

    @pytest.mark.asyncio
    async def test_dispatch_without_contact(self) -> None:
        notifier = MockNotifier()
        dispatcher = NotificationDispatcher(notifier, self.observability)

        user_result = await dispatcher.dispatch(User(id="u2"), "suspended")
        job_result = await dispatcher.dispatch(Job(id="job-1"), "cancelled")

        assert user_result.attempted is False
        assert job_result.attempted is False
        assert notifier.notices == []

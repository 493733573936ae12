"""Tests for TransitionExecutor component."""

from unittest.mock import AsyncMock

import pytest

from caredesk.domain.components.audit_recorder import AuditRecorder
from caredesk.domain.components.notification_dispatcher import NotificationDispatcher
from caredesk.domain.components.transition_executor import TransitionExecutor
from caredesk.domain.interfaces.audit_store import AuditQuery, AuditStoreError
from caredesk.domain.interfaces.entity_repository import RepositoryError
from caredesk.domain.interfaces.notifier import NotificationError, Notifier
from caredesk.domain.interfaces.observability_manager import (
    ObservabilityError,
    ObservabilityManager,
)
from caredesk.domain.models.booking import Booking, BookingStatus
from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.job import Job, JobStatus
from caredesk.domain.models.notification import StatusChangeNotice
from caredesk.domain.models.transition_error import (
    EntityNotFoundError,
    InvalidTransitionError,
    UnauthorizedTransitionError,
)
from caredesk.domain.models.transition_request import TransitionRequest
from caredesk.domain.models.user import User, UserRole, UserStatus
from caredesk.infrastructure.audit_store.memory_audit_store import InMemoryAuditStore
from caredesk.infrastructure.audit_store.memory_history_store import (
    InMemoryStatusHistoryStore,
)
from caredesk.infrastructure.repositories.memory_repository import (
    InMemoryEntityRepository,
)


class MockObservabilityManager(ObservabilityManager):
    """Mock ObservabilityManager for testing."""

    def __init__(self) -> None:
        self.events: list[dict] = []
        self.logs: list[dict] = []
        self.emit_error: Exception | None = None
        self.log_error: Exception | None = None

    async def emit_event(
        self,
        event_type: str,
        payload: dict,
        metadata: dict | None = None,
    ) -> None:
        if self.emit_error:
            raise self.emit_error
        self.events.append({"event_type": event_type, "payload": payload})

    async def log(
        self,
        level: str,
        message: str,
        context: dict | None = None,
    ) -> None:
        if self.log_error:
            raise self.log_error
        self.logs.append({"level": level, "message": message, "context": context or {}})


class MockNotifier(Notifier):
    """Mock Notifier recording notices, optionally failing."""

    def __init__(self, error: Exception | None = None) -> None:
        self.notices: list[StatusChangeNotice] = []
        self.error = error

    async def send_status_change(self, notice: StatusChangeNotice) -> None:
        self.notices.append(notice)
        if self.error:
            raise self.error


def approve_request(entity_id: str = "job-1") -> TransitionRequest:
    return TransitionRequest(
        entity_kind=EntityKind.Job,
        entity_id=entity_id,
        target_status=JobStatus.Confirmed,
        acting_admin_id="admin-1",
        audit_action="APPROVE_JOB",
        allowed_current_statuses=[JobStatus.Pending, JobStatus.Open, JobStatus.Active],
        error_hint="Only pending or open jobs can be approved",
    )


class TestTransitionExecutor:
    """Tests for the single-entity transition workflow."""

    def setup_method(self) -> None:
        self.jobs = InMemoryEntityRepository(Job)
        self.bookings = InMemoryEntityRepository(Booking)
        self.users = InMemoryEntityRepository(User)
        self.audit_store = InMemoryAuditStore()
        self.history_store = InMemoryStatusHistoryStore()
        self.observability = MockObservabilityManager()
        self.notifier = MockNotifier()
        self.executor = self._build_executor()

    def _build_executor(self) -> TransitionExecutor:
        return TransitionExecutor(
            repositories={
                EntityKind.Job: self.jobs,
                EntityKind.Booking: self.bookings,
                EntityKind.User: self.users,
            },
            audit_recorder=AuditRecorder(
                self.audit_store, self.observability, history_store=self.history_store
            ),
            notification_dispatcher=NotificationDispatcher(self.notifier, self.observability),
            observability_manager=self.observability,
        )

    async def _audit_entries(self) -> list:
        return await self.audit_store.query(AuditQuery())

    @pytest.mark.asyncio
    async def test_approve_open_job(self) -> None:
        """Test Job approve moves open to confirmed and audits APPROVE_JOB."""
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))

        updated = await self.executor.execute(approve_request())

        assert updated.status == JobStatus.Confirmed
        stored = await self.jobs.find_by_id("job-1")
        assert stored.status == JobStatus.Confirmed

        entries = await self._audit_entries()
        assert len(entries) == 1
        entry = entries[0]
        assert entry.action == "APPROVE_JOB"
        assert entry.admin_id == "admin-1"
        assert entry.entity_kind == EntityKind.Job
        assert entry.entity_id == "job-1"
        assert entry.from_status == "open"
        assert entry.to_status == "confirmed"

    @pytest.mark.asyncio
    async def test_approve_completed_job_is_denied_without_side_effects(self) -> None:
        """Test denial leaves the entity untouched and writes no audit entry."""
        await self.jobs.add(Job(id="job-1", status=JobStatus.Completed))

        with pytest.raises(
            InvalidTransitionError, match="Only pending or open jobs can be approved"
        ) as exc_info:
            await self.executor.execute(approve_request())

        assert exc_info.value.status_code == 400
        stored = await self.jobs.find_by_id("job-1")
        assert stored.status == JobStatus.Completed
        assert await self._audit_entries() == []
        assert self.observability.events == []

    @pytest.mark.asyncio
    async def test_booking_start_from_pending_uses_generated_message(self) -> None:
        await self.bookings.add(Booking(id="booking-1", status=BookingStatus.Pending))
        request = TransitionRequest(
            entity_kind=EntityKind.Booking,
            entity_id="booking-1",
            target_status=BookingStatus.InProgress,
            acting_admin_id="admin-1",
            audit_action="START_BOOKING",
            allowed_current_statuses=[BookingStatus.Confirmed],
        )

        with pytest.raises(InvalidTransitionError) as exc_info:
            await self.executor.execute(request)

        assert str(exc_info.value) == "Cannot transition booking from pending to in_progress"

    @pytest.mark.asyncio
    async def test_missing_entity_raises_not_found(self) -> None:
        with pytest.raises(EntityNotFoundError, match="Job not found") as exc_info:
            await self.executor.execute(approve_request("job-missing"))

        assert exc_info.value.status_code == 404
        assert await self._audit_entries() == []

    @pytest.mark.asyncio
    async def test_rejecting_predicate_raises_unauthorized(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))

        with pytest.raises(UnauthorizedTransitionError, match="Cannot modify") as exc_info:
            await self.executor.execute(
                approve_request(),
                authorize=lambda entity: False,
                denial_message="Cannot modify this job",
            )

        assert exc_info.value.status_code == 403
        stored = await self.jobs.find_by_id("job-1")
        assert stored.status == JobStatus.Open
        assert await self._audit_entries() == []

    @pytest.mark.asyncio
    async def test_no_allow_list_accepts_any_status(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Inactive))
        request = TransitionRequest(
            entity_kind=EntityKind.Job,
            entity_id="job-1",
            target_status=JobStatus.Open,
            acting_admin_id="admin-1",
            audit_action="UPDATE_JOB_STATUS",
        )

        updated = await self.executor.execute(request)

        assert updated.status == JobStatus.Open

    @pytest.mark.asyncio
    async def test_throwing_audit_store_does_not_change_result(self) -> None:
        """Test that audit failures are swallowed after a committed change."""
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))
        self.audit_store.append = AsyncMock(side_effect=AuditStoreError("disk full"))

        updated = await self.executor.execute(approve_request())

        assert updated.status == JobStatus.Confirmed
        # One retry by default
        assert self.audit_store.append.await_count == 2
        assert any(log["level"] == "ERROR" for log in self.observability.logs)
        assert self.observability.events[0]["payload"]["audited"] is False

    @pytest.mark.asyncio
    async def test_throwing_notifier_does_not_change_result(self) -> None:
        self.notifier.error = NotificationError("smtp down")
        await self.users.add(
            User(id="u1", status=UserStatus.Active, email="u1@example.com", name="U One")
        )
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="u1",
            target_status=UserStatus.Suspended,
            acting_admin_id="admin-1",
            audit_action="UPDATE_USER_STATUS",
            reason="Repeated no-shows",
        )

        updated = await self.executor.execute(request)

        assert updated.status == UserStatus.Suspended
        assert updated.status_reason == "Repeated no-shows"
        assert updated.status_updated_by == "admin-1"
        assert len(self.notifier.notices) == 1
        assert len(await self._audit_entries()) == 1
        assert any(log["level"] == "WARNING" for log in self.observability.logs)

    @pytest.mark.asyncio
    async def test_user_transition_sends_notice(self) -> None:
        await self.users.add(
            User(id="u1", status=UserStatus.Active, email="u1@example.com", name="U One")
        )
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="u1",
            target_status=UserStatus.Banned,
            acting_admin_id="admin-1",
            audit_action="UPDATE_USER_STATUS",
            reason="Fraud",
        )

        await self.executor.execute(request)

        notice = self.notifier.notices[0]
        assert notice.recipient_email == "u1@example.com"
        assert notice.status == "banned"
        assert notice.reason == "Fraud"

    @pytest.mark.asyncio
    async def test_job_transition_sends_no_notice(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))

        await self.executor.execute(approve_request())

        assert self.notifier.notices == []

    @pytest.mark.asyncio
    async def test_repository_failure_propagates_without_audit(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))
        self.jobs.update_status = AsyncMock(side_effect=RepositoryError("connection lost"))

        with pytest.raises(RepositoryError):
            await self.executor.execute(approve_request())

        assert self.jobs.update_status.await_count == 1
        assert await self._audit_entries() == []

    @pytest.mark.asyncio
    async def test_emits_status_transition_event(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))

        await self.executor.execute(approve_request())

        assert len(self.observability.events) == 1
        event = self.observability.events[0]
        assert event["event_type"] == "status_transition"
        assert event["payload"]["from_status"] == "open"
        assert event["payload"]["to_status"] == "confirmed"
        assert event["payload"]["audited"] is True

    @pytest.mark.asyncio
    async def test_event_failure_does_not_fail_transition(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))
        self.observability.emit_error = ObservabilityError("collector down")

        updated = await self.executor.execute(approve_request())

        assert updated.status == JobStatus.Confirmed
        assert self.observability.logs[-1]["level"] == "WARNING"

    @pytest.mark.asyncio
    async def test_superadmin_predicate_allows_admin_target(self) -> None:
        await self.users.add(User(id="admin-2", status=UserStatus.Active, role=UserRole.Admin))
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="admin-2",
            target_status=UserStatus.Suspended,
            acting_admin_id="root",
            audit_action="UPDATE_USER_STATUS",
        )

        updated = await self.executor.execute(request, authorize=lambda entity: True)

        assert updated.status == UserStatus.Suspended

    @pytest.mark.asyncio
    async def test_reapplying_current_status_is_audited(self) -> None:
        """Test idempotent re-apply still counts as one transition."""
        await self.jobs.add(Job(id="job-1", status=JobStatus.Confirmed))
        request = TransitionRequest(
            entity_kind=EntityKind.Job,
            entity_id="job-1",
            target_status=JobStatus.Confirmed,
            acting_admin_id="admin-1",
            audit_action="UPDATE_JOB_STATUS",
        )

        await self.executor.execute(request)

        entries = await self._audit_entries()
        assert len(entries) == 1
        assert entries[0].from_status == entries[0].to_status == "confirmed"

    @pytest.mark.asyncio
    async def test_raising_logger_does_not_fail_committed_transition(self) -> None:
        """Test every side effect failing while the logger itself raises."""
        await self.users.add(User(id="u1", status=UserStatus.Active, email="u1@example.com"))
        self.notifier.error = NotificationError("smtp down")
        self.audit_store.append = AsyncMock(side_effect=AuditStoreError("disk full"))
        self.observability.emit_error = RuntimeError("collector down")
        self.observability.log_error = RuntimeError("log sink down")
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="u1",
            target_status=UserStatus.Suspended,
            acting_admin_id="admin-1",
            audit_action="UPDATE_USER_STATUS",
        )

        updated = await self.executor.execute(request)

        assert updated.status == UserStatus.Suspended
        stored = await self.users.find_by_id("u1")
        assert stored.status == UserStatus.Suspended
        assert len(self.notifier.notices) == 1

    @pytest.mark.asyncio
    async def test_user_transition_is_added_to_status_history(self) -> None:
        await self.users.add(User(id="u1", status=UserStatus.Active))
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="u1",
            target_status=UserStatus.Banned,
            acting_admin_id="admin-1",
            audit_action="UPDATE_USER_STATUS",
            reason="Fraud",
        )

        await self.executor.execute(request)

        history = await self.history_store.history(EntityKind.User, "u1")
        assert len(history) == 1
        assert history[0].status == "banned"
        assert history[0].reason == "Fraud"
        assert history[0].changed_by == "admin-1"

    @pytest.mark.asyncio
    async def test_job_transition_has_no_status_history(self) -> None:
        await self.jobs.add(Job(id="job-1", status=JobStatus.Open))

        await self.executor.execute(approve_request())

        assert await self.history_store.history(EntityKind.Job, "job-1") == []

    @pytest.mark.asyncio
    async def test_history_failure_does_not_fail_transition(self) -> None:
        await self.users.add(User(id="u1", status=UserStatus.Active))
        self.history_store.append = AsyncMock(side_effect=RuntimeError("history down"))
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="u1",
            target_status=UserStatus.Suspended,
            acting_admin_id="admin-1",
            audit_action="UPDATE_USER_STATUS",
        )

        updated = await self.executor.execute(request)

        assert updated.status == UserStatus.Suspended
        assert len(await self._audit_entries()) == 1
        assert self.history_store.append.await_count == 2

    @pytest.mark.asyncio
    async def test_request_without_notify_sends_no_notice(self) -> None:
        await self.users.add(User(id="u1", status=UserStatus.Active, email="u1@example.com"))
        request = TransitionRequest(
            entity_kind=EntityKind.User,
            entity_id="u1",
            target_status=UserStatus.Inactive,
            acting_admin_id="admin-1",
            audit_action="DELETE_USER",
            notify=False,
        )

        updated = await self.executor.execute(request)

        assert updated.status == UserStatus.Inactive
        assert updated.deleted_at is not None
        assert self.notifier.notices == []

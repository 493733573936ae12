"""Backoffice - composition root for the caredesk transition engine."""

from collections.abc import Mapping, Sequence
from typing import Any

from caredesk.domain.components.audit_recorder import AuditRecorder
from caredesk.domain.components.bulk_transition_runner import BulkTransitionRunner
from caredesk.domain.components.lifecycle_manager import LifecycleManager
from caredesk.domain.components.notification_dispatcher import NotificationDispatcher
from caredesk.domain.components.transition_executor import TransitionExecutor
from caredesk.domain.interfaces.audit_store import AuditStore
from caredesk.domain.interfaces.entity_repository import EntityRepository
from caredesk.domain.interfaces.notifier import Notifier
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.interfaces.status_history_store import StatusHistoryStore
from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.booking import Booking
from caredesk.domain.models.bulk_outcome import BulkOutcome
from caredesk.domain.models.caregiver_profile import CaregiverProfile
from caredesk.domain.models.entity import EntityKind, TransitionableEntity
from caredesk.domain.models.job import Job
from caredesk.domain.models.payment import Payment
from caredesk.domain.models.user import User
from caredesk.infrastructure.audit_store.memory_audit_store import InMemoryAuditStore
from caredesk.infrastructure.audit_store.memory_history_store import (
    InMemoryStatusHistoryStore,
)
from caredesk.infrastructure.audit_store.mongo_audit_store import MongoAuditStore
from caredesk.infrastructure.audit_store.mongo_history_store import (
    MongoStatusHistoryStore,
)
from caredesk.infrastructure.config.settings import BackofficeSettings
from caredesk.infrastructure.notifications.log_notifier import LogNotifier
from caredesk.infrastructure.notifications.webhook_notifier import WebhookNotifier
from caredesk.infrastructure.observability.logger import DefaultObservabilityManager
from caredesk.infrastructure.repositories.memory_repository import (
    InMemoryEntityRepository,
)

ENTITY_MODELS: dict[EntityKind, type[TransitionableEntity]] = {
    EntityKind.Job: Job,
    EntityKind.Booking: Booking,
    EntityKind.User: User,
    EntityKind.Payment: Payment,
    EntityKind.Caregiver: CaregiverProfile,
}


class Backoffice:
    """Main entry point for the library.

    Wires settings, repositories, the audit store, the notifier and
    observability into the transition engine, and exposes the
    LifecycleManager that outer surfaces call.

    Example:
        ```python
        # In-memory repositories, in-memory audit trail, log notifier
        backoffice = Backoffice()

        # With configuration
        backoffice = Backoffice(config={"notifier_backend": "none"})

        # With a custom repository for users
        backoffice = Backoffice(repositories={EntityKind.User: MyUserRepository()})

        async with Backoffice() as backoffice:
            job = await backoffice.transition(
                EntityKind.Job, "approve", "job-1", AdminContext(admin_id="admin-1")
            )
        ```
    """

    def __init__(
        self,
        repositories: Mapping[EntityKind, EntityRepository] | None = None,
        audit_store: AuditStore | None = None,
        history_store: StatusHistoryStore | None = None,
        notifier: Notifier | None = None,
        observability_manager: ObservabilityManager | None = None,
        config: BackofficeSettings | dict[str, Any] | None = None,
    ) -> None:
        """Initialize Backoffice with dependencies.

        Args:
            repositories: Repositories per entity kind. Kinds left out get an
                         InMemoryEntityRepository.
            audit_store: Optional AuditStore. If not provided, one is built
                        from ``audit_backend``.
            history_store: Optional StatusHistoryStore. If not provided, one is
                          built next to the audit store.
            notifier: Optional Notifier. If not provided, one is built from
                     ``notifier_backend`` ("none" disables notifications).
            observability_manager: Optional ObservabilityManager. Defaults to
                                 DefaultObservabilityManager.
            config: Optional configuration. Can be:
                   - BackofficeSettings instance
                   - Dictionary with configuration values
                   - None (loads from environment variables)

        Raises:
            ValueError: If configuration is invalid.
        """
        if config is None:
            self._config = BackofficeSettings()
        elif isinstance(config, dict):
            self._config = BackofficeSettings.from_dict(config)
        elif isinstance(config, BackofficeSettings):
            self._config = config
        else:
            raise ValueError(
                f"Invalid config type: {type(config)}. Expected BackofficeSettings, dict, or None"
            )

        self._repositories: dict[EntityKind, EntityRepository] = {
            kind: InMemoryEntityRepository(model_cls) for kind, model_cls in ENTITY_MODELS.items()
        }
        self._repositories.update(repositories or {})

        if audit_store is None:
            self._audit_store = self._build_audit_store()
        else:
            self._audit_store = audit_store

        if history_store is None:
            self._history_store = self._build_history_store()
        else:
            self._history_store = history_store

        if notifier is None:
            self._notifier = self._build_notifier()
        else:
            self._notifier = notifier

        if observability_manager is None:
            self._observability_manager = DefaultObservabilityManager(
                log_level=self._config.log_level,
                json_format=self._config.log_json,
            )
        else:
            self._observability_manager = observability_manager

        self._audit_recorder = AuditRecorder(
            audit_store=self._audit_store,
            observability_manager=self._observability_manager,
            max_attempts=self._config.audit_write_attempts,
            history_store=self._history_store,
        )
        self._dispatcher = NotificationDispatcher(
            notifier=self._notifier,
            observability_manager=self._observability_manager,
        )
        self._executor = TransitionExecutor(
            repositories=self._repositories,
            audit_recorder=self._audit_recorder,
            notification_dispatcher=self._dispatcher,
            observability_manager=self._observability_manager,
        )
        self._bulk_runner = BulkTransitionRunner(
            executor=self._executor,
            observability_manager=self._observability_manager,
            report_skipped=self._config.report_skipped_bulk_items,
        )
        self._lifecycle_manager = LifecycleManager(
            executor=self._executor,
            bulk_runner=self._bulk_runner,
            audit_store=self._audit_store,
            history_store=self._history_store,
        )

    def _build_audit_store(self) -> AuditStore:
        if self._config.audit_backend == "mongo":
            return MongoAuditStore(
                connection_url=self._config.mongodb_url,
                database_name=self._config.mongodb_database,
                collection_name=self._config.audit_collection,
            )
        return InMemoryAuditStore()

    def _build_history_store(self) -> StatusHistoryStore:
        if isinstance(self._audit_store, MongoAuditStore):
            return MongoStatusHistoryStore(
                client=self._audit_store.client,
                database_name=self._config.mongodb_database,
                collection_name=self._config.status_history_collection,
            )
        return InMemoryStatusHistoryStore()

    def _build_notifier(self) -> Notifier | None:
        if self._config.notifier_backend == "webhook":
            return WebhookNotifier(
                url=self._config.notification_webhook_url or "",
                timeout=self._config.notification_timeout_seconds,
            )
        if self._config.notifier_backend == "log":
            return LogNotifier()
        return None

    async def __aenter__(self) -> "Backoffice":
        if isinstance(self._audit_store, MongoAuditStore):
            await self._audit_store.initialize()
        if isinstance(self._history_store, MongoStatusHistoryStore):
            await self._history_store.initialize()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release external connections held by the audit store."""
        if isinstance(self._audit_store, MongoAuditStore):
            await self._audit_store.close()

    @property
    def config(self) -> BackofficeSettings:
        return self._config

    @property
    def lifecycle_manager(self) -> LifecycleManager:
        return self._lifecycle_manager

    @property
    def executor(self) -> TransitionExecutor:
        return self._executor

    @property
    def bulk_runner(self) -> BulkTransitionRunner:
        return self._bulk_runner

    @property
    def audit_store(self) -> AuditStore:
        return self._audit_store

    @property
    def history_store(self) -> StatusHistoryStore:
        return self._history_store

    @property
    def notifier(self) -> Notifier | None:
        return self._notifier

    @property
    def observability_manager(self) -> ObservabilityManager:
        return self._observability_manager

    def repository(self, kind: EntityKind) -> EntityRepository:
        """Return the repository serving ``kind``."""
        return self._executor.repository_for(kind)

    async def transition(
        self,
        kind: EntityKind | str,
        operation: str,
        entity_id: str,
        admin: AdminContext,
        reason: str | None = None,
        status: str | None = None,
    ) -> TransitionableEntity:
        """Shortcut for :meth:`LifecycleManager.transition`."""
        return await self._lifecycle_manager.transition(
            kind, operation, entity_id, admin, reason=reason, status=status
        )

    async def bulk_transition(
        self,
        kind: EntityKind | str,
        operation: str,
        entity_ids: Sequence[str],
        admin: AdminContext,
        reason: str | None = None,
        status: str | None = None,
    ) -> BulkOutcome:
        """Shortcut for :meth:`LifecycleManager.bulk_transition`."""
        return await self._lifecycle_manager.bulk_transition(
            kind, operation, entity_ids, admin, reason=reason, status=status
        )

"""LifecycleManager: entry point for administrative status operations."""

from collections.abc import Sequence

from caredesk.domain.components.authorization import (
    ADMIN_ACCOUNT_DENIAL,
    admin_account_guard,
)
from caredesk.domain.components.bulk_transition_runner import BulkTransitionRunner
from caredesk.domain.components.operation_catalog import get_operation
from caredesk.domain.components.transition_executor import (
    AuthorizePredicate,
    TransitionExecutor,
)
from caredesk.domain.interfaces.audit_store import AuditQuery, AuditStore
from caredesk.domain.interfaces.status_history_store import StatusHistoryStore
from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.audit_entry import AuditEntry
from caredesk.domain.models.bulk_outcome import BulkOutcome
from caredesk.domain.models.entity import EntityKind, TransitionableEntity, status_value
from caredesk.domain.models.status_change import StatusChange
from caredesk.domain.models.transition_error import InvalidArgumentError
from caredesk.domain.models.transition_operation import TransitionOperation
from caredesk.domain.models.transition_request import TransitionTemplate
from caredesk.infrastructure.utils.validation import (
    ValidationError,
    validate_admin_id,
    validate_entity_id,
    validate_reason,
)


class LifecycleManager:
    """Resolves catalog operations and runs them through the engine.

    Outer surfaces (HTTP routes, scripts) call this class with an entity
    kind, an operation name and the acting administrator. It validates the
    input, builds the transition template for the catalog entry, attaches
    the authorization predicate for the kind, and hands off to the
    TransitionExecutor or BulkTransitionRunner.

    Example:
        ```python
        job = await manager.transition(
            EntityKind.Job, "approve", "job-1", AdminContext(admin_id="admin-1")
        )
        outcome = await manager.bulk_transition(
            EntityKind.User,
            "bulk-status",
            ["u1", "u2"],
            admin,
            status="suspended",
        )
        ```
    """

    def __init__(
        self,
        executor: TransitionExecutor,
        bulk_runner: BulkTransitionRunner,
        audit_store: AuditStore,
        history_store: StatusHistoryStore | None = None,
    ) -> None:
        """Initialize LifecycleManager.

        Args:
            executor: Single-entity transition executor.
            bulk_runner: Batch runner built on the same executor.
            audit_store: Store read by :meth:`list_audit_entries`.
            history_store: Store read by :meth:`status_history`.
        """
        self._executor = executor
        self._bulk_runner = bulk_runner
        self._audit_store = audit_store
        self._history_store = history_store

    async def transition(
        self,
        kind: EntityKind | str,
        operation: str,
        entity_id: str,
        admin: AdminContext,
        reason: str | None = None,
        status: str | None = None,
    ) -> TransitionableEntity:
        """Run a catalog operation against one entity.

        Args:
            kind: Entity kind.
            operation: Operation name from the catalog (e.g. "approve").
            entity_id: Entity to transition.
            admin: Acting administrator.
            reason: Optional free-text reason.
            status: Requested status; required for direct-status operations.

        Returns:
            The updated entity.

        Raises:
            InvalidArgumentError: If the operation or input is invalid.
            EntityNotFoundError: If the entity does not exist.
            UnauthorizedTransitionError: If the admin may not alter the entity.
            InvalidTransitionError: If the entity's status forbids the operation.
        """
        op = get_operation(kind, operation)
        template = self._build_template(op, admin, reason, status)
        entity_id = self._validate(validate_entity_id, entity_id)

        return await self._executor.execute(
            template.for_entity(entity_id),
            authorize=self._authorization_for(op.entity_kind, admin),
            denial_message=op.denial_message or ADMIN_ACCOUNT_DENIAL,
        )

    async def bulk_transition(
        self,
        kind: EntityKind | str,
        operation: str,
        entity_ids: Sequence[str] | None,
        admin: AdminContext,
        reason: str | None = None,
        status: str | None = None,
    ) -> BulkOutcome:
        """Run a catalog operation against many entities.

        Missing entities and entities the admin may not alter are skipped.
        Every id is validated before any entity is touched.

        Raises:
            InvalidArgumentError: If ``entity_ids`` is empty, an id is
                malformed or the input is otherwise invalid. Per-item
                failures never raise.
        """
        op = get_operation(kind, operation)
        if not entity_ids or isinstance(entity_ids, str):
            raise InvalidArgumentError(
                f"{op.entity_kind.value}Ids array is required",
                details={"entity_kind": op.entity_kind.value},
            )
        template = self._build_template(op, admin, reason, status)
        ids = [self._validate(validate_entity_id, entity_id) for entity_id in entity_ids]

        return await self._bulk_runner.run(
            ids,
            template,
            authorize=self._authorization_for(op.entity_kind, admin),
        )

    async def get_entity(self, kind: EntityKind | str, entity_id: str) -> TransitionableEntity:
        """Fetch one entity.

        Raises:
            EntityNotFoundError: If the entity does not exist.
        """
        entity_kind = self._resolve_kind(kind)
        entity_id = self._validate(validate_entity_id, entity_id)
        return await self._executor.find_entity(entity_kind, entity_id)

    async def list_audit_entries(self, query: AuditQuery | None = None) -> list[AuditEntry]:
        """Return audit entries matching ``query``, newest first."""
        return await self._audit_store.query(query or AuditQuery())

    async def count_audit_entries(self, query: AuditQuery | None = None) -> int:
        """Count audit entries matching ``query``."""
        return await self._audit_store.count(query or AuditQuery())

    async def status_history(
        self, kind: EntityKind | str, entity_id: str
    ) -> list[StatusChange]:
        """Return the status history of an existing entity, newest first.

        Raises:
            EntityNotFoundError: If the entity does not exist.
        """
        entity = await self.get_entity(kind, entity_id)
        if self._history_store is None:
            return []
        return await self._history_store.history(entity.kind, entity.id)

    def _build_template(
        self,
        op: TransitionOperation,
        admin: AdminContext,
        reason: str | None,
        status: str | None,
    ) -> TransitionTemplate:
        admin_id = self._validate(validate_admin_id, admin.admin_id)
        reason = self._validate(validate_reason, reason)

        target = None
        if op.is_direct:
            allowed = op.allowed_targets or ()
            target = status_value(status) if status is not None else None
            if target not in allowed:
                raise InvalidArgumentError(
                    f"{op.invalid_target_message}. Must be one of: {', '.join(allowed)}",
                    details={"status": target, "allowed": list(allowed)},
                )

        return op.template(admin_id, reason=reason, target_status=target)

    @staticmethod
    def _authorization_for(
        kind: EntityKind, admin: AdminContext
    ) -> AuthorizePredicate | None:
        if kind == EntityKind.User:
            return admin_account_guard(admin)
        return None

    @staticmethod
    def _resolve_kind(kind: EntityKind | str) -> EntityKind:
        try:
            return EntityKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Unknown entity kind: {kind}") from None

    @staticmethod
    def _validate(validator, value):
        try:
            return validator(value)
        except ValidationError as e:
            raise InvalidArgumentError(e.message, details={"field": e.field}) from e

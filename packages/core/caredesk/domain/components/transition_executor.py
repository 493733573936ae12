"""TransitionExecutor component: the canonical single-entity transition workflow."""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from caredesk.domain.components.audit_recorder import AuditRecorder
from caredesk.domain.components.notification_dispatcher import NotificationDispatcher
from caredesk.domain.components.transition_guard import TransitionGuard
from caredesk.domain.interfaces.entity_repository import EntityRepository
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.models.audit_entry import AuditEntry
from caredesk.domain.models.entity import EntityKind, TransitionableEntity
from caredesk.domain.models.status_change import StatusChange
from caredesk.domain.models.transition_error import (
    EntityNotFoundError,
    InvalidArgumentError,
    InvalidTransitionError,
    UnauthorizedTransitionError,
)
from caredesk.domain.models.transition_request import TransitionRequest

AuthorizePredicate = Callable[[TransitionableEntity], bool]
"""Returns False when the acting administrator may not alter the entity."""


class TransitionExecutor:
    """Runs one guarded status transition end to end.

    Every approve/reject/cancel/confirm/start/complete/reopen/refund/delete and
    direct-status operation goes through :meth:`execute`:

    1. resolve the entity through its kind's repository,
    2. check the optional authorization predicate,
    3. ask the TransitionGuard whether the move is legal,
    4. persist the new status (exactly once, never retried),
    5. append a StatusChange to the history for kinds that keep one,
    6. record one AuditEntry,
    7. notify the affected party for kinds with a notification policy,
    8. emit a ``status_transition`` event.

    Steps 5 to 8 happen after the change is committed and never fail the call.
    """

    def __init__(
        self,
        repositories: Mapping[EntityKind, EntityRepository],
        audit_recorder: AuditRecorder,
        notification_dispatcher: NotificationDispatcher,
        observability_manager: ObservabilityManager,
        guard: TransitionGuard | None = None,
        notify_kinds: Iterable[EntityKind] = (EntityKind.User,),
        history_kinds: Iterable[EntityKind] = (EntityKind.User,),
    ) -> None:
        """Initialize TransitionExecutor.

        Args:
            repositories: Repository per entity kind.
            audit_recorder: Writes the audit entry for each committed change.
            notification_dispatcher: Delivers status-change notices.
            observability_manager: Receives transition events and warnings.
            guard: Decision function. Defaults to a new TransitionGuard.
            notify_kinds: Entity kinds whose status changes are notified.
            history_kinds: Entity kinds whose status changes go to the
                status history.
        """
        self._repositories = dict(repositories)
        self._audit_recorder = audit_recorder
        self._dispatcher = notification_dispatcher
        self._observability = observability_manager
        self._guard = guard or TransitionGuard()
        self._notify_kinds = frozenset(notify_kinds)
        self._history_kinds = frozenset(history_kinds)

    @property
    def guard(self) -> TransitionGuard:
        return self._guard

    def repository_for(self, kind: EntityKind) -> EntityRepository:
        """Return the repository serving ``kind``.

        Raises:
            InvalidArgumentError: If no repository is registered for the kind.
        """
        try:
            return self._repositories[kind]
        except KeyError:
            raise InvalidArgumentError(
                f"No repository registered for {kind.value} entities",
                details={"entity_kind": kind.value},
            ) from None

    async def find_entity(self, kind: EntityKind, entity_id: str) -> TransitionableEntity:
        """Look up an entity, raising EntityNotFoundError if it is missing."""
        entity = await self.repository_for(kind).find_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(
                f"{kind.label} not found",
                details={"entity_kind": kind.value, "entity_id": entity_id},
            )
        return entity

    async def execute(
        self,
        request: TransitionRequest,
        authorize: AuthorizePredicate | None = None,
        entity: TransitionableEntity | None = None,
        denial_message: str | None = None,
    ) -> TransitionableEntity:
        """Apply a transition request to one entity.

        Args:
            request: The transition to apply.
            authorize: Optional predicate; returning False rejects the request.
            entity: Entity already loaded by the caller for this request.
                When omitted it is fetched from the repository.
            denial_message: Message used when ``authorize`` rejects the entity.

        Returns:
            The updated entity as returned by the repository.

        Raises:
            EntityNotFoundError: If the entity does not exist.
            UnauthorizedTransitionError: If ``authorize`` rejects the entity.
            InvalidTransitionError: If the guard denies the transition.
            RepositoryError: If persisting the new status fails.
        """
        kind = request.entity_kind
        repository = self.repository_for(kind)

        if entity is None:
            entity = await self.find_entity(kind, request.entity_id)

        if authorize is not None and not authorize(entity):
            raise UnauthorizedTransitionError(
                denial_message or f"Not permitted to modify this {kind.value}",
                details={"entity_id": request.entity_id, "admin_id": request.acting_admin_id},
            )

        from_status = entity.status_value
        decision = self._guard.decide(
            current_status=from_status,
            target_status=request.target_status,
            allowed_current_statuses=request.allowed_current_statuses,
            entity_kind=kind,
            error_hint=request.error_hint,
        )
        if decision.denied:
            raise InvalidTransitionError(
                decision.reason or "Transition not allowed",
                details={
                    "entity_id": request.entity_id,
                    "from_status": from_status,
                    "to_status": request.target_status,
                },
            )

        updated = await repository.update_status(
            request.entity_id,
            request.target_status,
            reason=request.reason,
            changed_by=request.acting_admin_id,
        )

        if kind in self._history_kinds:
            await self._audit_recorder.record_status_change(
                StatusChange(
                    entity_kind=kind,
                    entity_id=request.entity_id,
                    status=request.target_status,
                    reason=request.reason,
                    changed_by=request.acting_admin_id,
                )
            )

        audit_entry = AuditEntry(
            admin_id=request.acting_admin_id,
            action=request.audit_action,
            entity_kind=kind,
            entity_id=request.entity_id,
            from_status=from_status,
            to_status=request.target_status,
            reason=request.reason,
        )
        audited = await self._audit_recorder.record(audit_entry)

        notified = False
        if request.notify and kind in self._notify_kinds:
            result = await self._dispatcher.dispatch(
                updated, request.target_status, request.reason
            )
            notified = result.delivered

        await self._emit(
            "status_transition",
            {
                "entity_kind": kind.value,
                "entity_id": request.entity_id,
                "from_status": from_status,
                "to_status": request.target_status,
                "action": request.audit_action,
                "admin_id": request.acting_admin_id,
                "audited": audited,
                "notified": notified,
            },
        )
        return updated

    async def _emit(self, event_type: str, payload: dict[str, Any]) -> None:
        try:
            await self._observability.emit_event(event_type=event_type, payload=payload)
        except Exception as e:
            # Log error but don't fail the transition if event emission fails
            try:
                await self._observability.log(
                    level="WARNING",
                    message=f"Failed to emit {event_type} event: {e}",
                    context={"entity_id": payload.get("entity_id")},
                )
            except Exception:
                pass

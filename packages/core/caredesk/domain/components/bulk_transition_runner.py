"""BulkTransitionRunner component for fault-isolated batch transitions."""

from collections.abc import Sequence
from typing import Any

from caredesk.domain.components.transition_executor import (
    AuthorizePredicate,
    TransitionExecutor,
)
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.models.bulk_outcome import BulkOutcome, FailedItem
from caredesk.domain.models.transition_error import InvalidArgumentError
from caredesk.domain.models.transition_request import TransitionTemplate


class BulkTransitionRunner:
    """Applies one transition template to many entity ids.

    Ids are processed sequentially in the order given. A failure on one id
    is recorded in ``failed_ids`` and never stops the batch. Ids that do not
    resolve, or that the authorization predicate rejects, are skipped; by
    default they are not reported at all.
    """

    def __init__(
        self,
        executor: TransitionExecutor,
        observability_manager: ObservabilityManager,
        report_skipped: bool = False,
    ) -> None:
        """Initialize BulkTransitionRunner.

        Args:
            executor: Executor used for every item.
            observability_manager: Receives the batch summary event.
            report_skipped: List skipped ids in ``failed_ids`` instead of
                dropping them silently.
        """
        self._executor = executor
        self._observability = observability_manager
        self._report_skipped = report_skipped

    async def run(
        self,
        entity_ids: Sequence[str],
        template: TransitionTemplate,
        authorize: AuthorizePredicate | None = None,
    ) -> BulkOutcome:
        """Run the template against each id.

        Args:
            entity_ids: Ids to transition, processed in order.
            template: Transition applied to every id.
            authorize: Optional predicate; rejected entities are skipped.

        Returns:
            BulkOutcome with the updated entities and the failed ids.

        Raises:
            InvalidArgumentError: If ``entity_ids`` is empty.
        """
        if not entity_ids:
            raise InvalidArgumentError(
                f"{template.entity_kind.value}Ids array is required",
                details={"entity_kind": template.entity_kind.value},
            )

        kind = template.entity_kind
        repository = self._executor.repository_for(kind)
        outcome = BulkOutcome()

        for entity_id in entity_ids:
            try:
                entity = await repository.find_by_id(entity_id)
                if entity is None:
                    self._skip(outcome, entity_id, f"{kind.label} not found")
                    continue
                if authorize is not None and not authorize(entity):
                    self._skip(outcome, entity_id, "Not permitted")
                    continue

                updated = await self._executor.execute(
                    template.for_entity(entity_id),
                    entity=entity,
                )
                outcome.succeeded.append(updated)
            except Exception as e:
                await self._log_item_failure(entity_id, template, e)
                outcome.failed_ids.append(FailedItem(id=str(entity_id), reason=str(e)))

        outcome.processed_count = len(outcome.succeeded)

        await self._emit_summary(
            {
                "entity_kind": kind.value,
                "action": template.audit_action,
                "admin_id": template.acting_admin_id,
                "to_status": template.target_status,
                "requested_count": len(entity_ids),
                "processed_count": outcome.processed_count,
                "failed_count": outcome.failed_count,
            }
        )
        return outcome

    def _skip(self, outcome: BulkOutcome, entity_id: str, reason: str) -> None:
        if self._report_skipped:
            outcome.failed_ids.append(FailedItem(id=entity_id, reason=reason))

    async def _log_item_failure(
        self, entity_id: str, template: TransitionTemplate, error: Exception
    ) -> None:
        try:
            await self._observability.log(
                level="WARNING",
                message=f"Bulk transition failed for {entity_id}: {error}",
                context={
                    "entity_kind": template.entity_kind.value,
                    "entity_id": entity_id,
                    "action": template.audit_action,
                },
            )
        except Exception:
            pass

    async def _emit_summary(self, payload: dict[str, Any]) -> None:
        try:
            await self._observability.emit_event(
                event_type="bulk_transition_completed",
                payload=payload,
            )
        except Exception as e:
            try:
                await self._observability.log(
                    level="WARNING",
                    message=f"Failed to emit bulk_transition_completed event: {e}",
                    context={"action": payload.get("action")},
                )
            except Exception:
                pass

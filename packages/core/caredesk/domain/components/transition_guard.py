"""TransitionGuard: pure allow-list check for status transitions."""

from collections.abc import Iterable
from typing import Any

from caredesk.domain.models.entity import EntityKind, status_value
from caredesk.domain.models.transition_decision import TransitionDecision


class TransitionGuard:
    """Decides whether an entity may move from its current status.

    Legality is expressed per operation as an explicit allow-list of origin
    statuses rather than as one state-machine graph per entity kind.

    The guard never inspects the target status against a graph and never
    raises. Moving to the status the entity already has is allowed unless
    the allow-list excludes it.
    """

    def decide(
        self,
        current_status: Any,
        target_status: Any,
        allowed_current_statuses: Iterable[Any] | None = None,
        entity_kind: EntityKind | str | None = None,
        error_hint: str | None = None,
    ) -> TransitionDecision:
        """Check a requested transition against an allow-list.

        Args:
            current_status: Status the entity is in now (enum member or string).
            target_status: Requested status (enum member or string).
            allowed_current_statuses: Statuses the operation may originate
                from. None permits every current status.
            entity_kind: Kind used in the generated denial message.
            error_hint: Denial message to use instead of the generated one.

        Returns:
            TransitionDecision.allow() or TransitionDecision.deny(reason).
        """
        if allowed_current_statuses is None:
            return TransitionDecision.allow()

        current = status_value(current_status)
        allowed = {status_value(s) for s in allowed_current_statuses}
        if current in allowed:
            return TransitionDecision.allow()

        return TransitionDecision.deny(
            error_hint
            or self.describe_denial(current, status_value(target_status), entity_kind)
        )

    @staticmethod
    def describe_denial(
        current_status: str,
        target_status: str,
        entity_kind: EntityKind | str | None,
    ) -> str:
        """Generated denial message, e.g. 'Cannot transition booking from pending to in_progress'."""
        kind = status_value(entity_kind).lower() if entity_kind is not None else "entity"
        return f"Cannot transition {kind} from {current_status} to {target_status}"

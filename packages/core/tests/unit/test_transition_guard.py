"""Tests for TransitionGuard component."""

import pytest

from caredesk.domain.components.transition_guard import TransitionGuard
from caredesk.domain.models.booking import BookingStatus
from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.job import JobStatus


class TestTransitionGuard:
    """Tests for the allow-list decision function."""

    def setup_method(self) -> None:
        self.guard = TransitionGuard()

    @pytest.mark.parametrize("current", [s.value for s in JobStatus])
    def test_no_allow_list_permits_every_current_status(self, current: str) -> None:
        """Test that an undefined allow-list allows any current status."""
        decision = self.guard.decide(current, JobStatus.Confirmed)

        assert decision.allowed is True
        assert decision.reason is None

    def test_current_status_in_allow_list_is_allowed(self) -> None:
        decision = self.guard.decide(
            JobStatus.Open,
            JobStatus.Confirmed,
            allowed_current_statuses=[JobStatus.Pending, JobStatus.Open],
        )

        assert decision.allowed is True

    def test_denial_uses_caller_hint(self) -> None:
        """Test that a denied transition carries the supplied hint."""
        decision = self.guard.decide(
            "completed",
            "confirmed",
            allowed_current_statuses={"pending", "open", "active"},
            entity_kind=EntityKind.Job,
            error_hint="Only pending or open jobs can be approved",
        )

        assert decision.denied is True
        assert decision.reason == "Only pending or open jobs can be approved"

    def test_denial_generates_message_without_hint(self) -> None:
        decision = self.guard.decide(
            BookingStatus.Pending,
            BookingStatus.InProgress,
            allowed_current_statuses=[BookingStatus.Confirmed],
            entity_kind=EntityKind.Booking,
        )

        assert decision.denied is True
        assert decision.reason == "Cannot transition booking from pending to in_progress"

    def test_denial_without_kind_uses_generic_noun(self) -> None:
        decision = self.guard.decide("a", "b", allowed_current_statuses=["c"])

        assert decision.reason == "Cannot transition entity from a to b"

    def test_same_status_is_allowed_when_in_allow_list(self) -> None:
        """Test that re-applying the current status is idempotent."""
        decision = self.guard.decide(
            "confirmed", "confirmed", allowed_current_statuses=["confirmed"]
        )

        assert decision.allowed is True

    def test_same_status_is_denied_when_excluded(self) -> None:
        decision = self.guard.decide(
            "cancelled", "cancelled", allowed_current_statuses=["open", "pending"]
        )

        assert decision.denied is True

    def test_empty_allow_list_denies_everything(self) -> None:
        decision = self.guard.decide("open", "confirmed", allowed_current_statuses=[])

        assert decision.denied is True

    def test_enum_and_string_compare_by_value(self) -> None:
        decision = self.guard.decide(
            "in_progress",
            BookingStatus.Completed,
            allowed_current_statuses=[BookingStatus.InProgress],
        )

        assert decision.allowed is True

    @pytest.mark.parametrize(
        ("current", "allowed"),
        [
            ("open", None),
            ("open", []),
            ("", ["open"]),
            (None, ["open"]),
            (42, ["42"]),
        ],
    )
    def test_decide_is_total(self, current, allowed) -> None:
        """Test that decide returns a decision for odd inputs instead of raising."""
        decision = self.guard.decide(current, "confirmed", allowed_current_statuses=allowed)

        assert decision.allowed in (True, False)
        assert decision.denied is (not decision.allowed)

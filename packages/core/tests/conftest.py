"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from caredesk.domain.models.booking import Booking, BookingStatus
from caredesk.domain.models.job import Job, JobStatus
from caredesk.domain.models.payment import Payment, PaymentStatus
from caredesk.domain.models.user import User, UserRole, UserStatus

# Load .env file from project root before running tests
project_root = Path(__file__).parent.parent.parent.parent
env_path = project_root / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    core_env_path = project_root / "packages" / "core" / ".env"
    if core_env_path.exists():
        load_dotenv(core_env_path)


@pytest.fixture(autouse=True)
def isolate_caredesk_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CAREDESK_* variables from a developer .env out of settings tests."""
    for name in (
        "CAREDESK_AUDIT_BACKEND",
        "CAREDESK_NOTIFIER_BACKEND",
        "CAREDESK_REPORT_SKIPPED_BULK_ITEMS",
        "CAREDESK_AUDIT_WRITE_ATTEMPTS",
        "CAREDESK_STATUS_HISTORY_COLLECTION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def open_job() -> Job:
    return Job(id="job-1", status=JobStatus.Open, title="Weekend sitter")


@pytest.fixture
def pending_booking() -> Booking:
    return Booking(id="booking-1", status=BookingStatus.Pending)


@pytest.fixture
def paid_payment() -> Payment:
    return Payment(id="payment-1", status=PaymentStatus.Paid, total_amount="120.00")


@pytest.fixture
def parent_user() -> User:
    return User(
        id="u1",
        status=UserStatus.Active,
        role=UserRole.Parent,
        email="Parent.One@Example.com",
        name="Parent One",
    )

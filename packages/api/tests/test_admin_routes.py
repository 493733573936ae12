"""Tests for the admin API routes."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from caredesk.backoffice import Backoffice
from caredesk.domain.interfaces.observability_manager import ObservabilityManager
from caredesk.domain.models.booking import Booking, BookingStatus
from caredesk.domain.models.caregiver_profile import CaregiverProfile, VerificationStatus
from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.job import Job, JobStatus
from caredesk.domain.models.payment import Payment, PaymentStatus
from caredesk.domain.models.user import User, UserRole, UserStatus
from caredesk.infrastructure.repositories.memory_repository import (
    InMemoryEntityRepository,
)
from caredesk_api.dependencies import get_backoffice
from caredesk_api.main import app

ADMIN_HEADERS = {"X-Admin-Id": "admin-1"}
SUPERADMIN_HEADERS = {"X-Admin-Id": "root", "X-Admin-Role": "superadmin"}


class MockObservabilityManager(ObservabilityManager):
    """Mock ObservabilityManager for testing."""

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
        pass


def build_backoffice() -> Backoffice:
    return Backoffice(
        repositories={
            EntityKind.Job: InMemoryEntityRepository(
                Job,
                [
                    Job(id="job-open", status=JobStatus.Open),
                    Job(id="job-done", status=JobStatus.Completed),
                ],
            ),
            EntityKind.Booking: InMemoryEntityRepository(
                Booking,
                [
                    Booking(id="b-pending", status=BookingStatus.Pending),
                    Booking(id="b-confirmed", status=BookingStatus.Confirmed),
                ],
            ),
            EntityKind.User: InMemoryEntityRepository(
                User,
                [
                    User(id="u1", email="u1@example.com"),
                    User(id="u2", role=UserRole.Admin),
                    User(id="u3", role=UserRole.Caregiver),
                ],
            ),
            EntityKind.Caregiver: InMemoryEntityRepository(
                CaregiverProfile,
                [CaregiverProfile(id="u3", name="Carol")],
            ),
            EntityKind.Payment: InMemoryEntityRepository(
                Payment,
                [Payment(id="pay-1", status=PaymentStatus.Paid, total_amount=Decimal("120.00"))],
            ),
        },
        config={"notifier_backend": "none"},
        observability_manager=MockObservabilityManager(),
    )


class TestAdminRoutes:
    """Tests for the admin HTTP surface."""

    def setup_method(self) -> None:
        self.backoffice = build_backoffice()
        app.dependency_overrides[get_backoffice] = lambda: self.backoffice
        self.client = TestClient(app)

    def teardown_method(self) -> None:
        app.dependency_overrides.clear()

    def test_health(self) -> None:
        response = self.client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_missing_admin_header(self) -> None:
        response = self.client.post("/api/admin/jobs/job-open/approve")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Admin authentication required"}

    def test_non_admin_role(self) -> None:
        response = self.client.post(
            "/api/admin/jobs/job-open/approve",
            headers={"X-Admin-Id": "u1", "X-Admin-Role": "parent"},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"

    def test_approve_job(self) -> None:
        response = self.client.post("/api/admin/jobs/job-open/approve", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Job approved successfully"
        assert body["data"]["id"] == "job-open"
        assert body["data"]["status"] == "confirmed"

    def test_approve_completed_job(self) -> None:
        response = self.client.post("/api/admin/jobs/job-done/approve", headers=ADMIN_HEADERS)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Only pending or open jobs can be approved",
        }

    def test_reject_job_with_reason(self) -> None:
        response = self.client.post(
            "/api/admin/jobs/job-open/reject",
            headers=ADMIN_HEADERS,
            json={"reason": "Duplicate posting"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "cancelled"

        logs = self.client.get("/api/admin/audit-logs", headers=ADMIN_HEADERS).json()
        assert logs["data"][0]["action"] == "REJECT_JOB"
        assert logs["data"][0]["reason"] == "Duplicate posting"

    def test_job_not_found(self) -> None:
        response = self.client.post("/api/admin/jobs/nope/cancel", headers=ADMIN_HEADERS)

        assert response.status_code == 404
        assert response.json()["error"] == "Job not found"

    def test_get_job(self) -> None:
        response = self.client.get("/api/admin/jobs/job-open", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "open"

    def test_job_status_update(self) -> None:
        response = self.client.patch(
            "/api/admin/jobs/job-done/status",
            headers=ADMIN_HEADERS,
            json={"status": "open"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Job status updated to open"

    def test_start_pending_booking(self) -> None:
        response = self.client.post(
            "/api/admin/bookings/b-pending/start", headers=ADMIN_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Cannot transition booking from pending to in_progress"
        )

    def test_start_confirmed_booking(self) -> None:
        response = self.client.post(
            "/api/admin/bookings/b-confirmed/start", headers=ADMIN_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Booking marked as in progress"
        assert response.json()["data"]["status"] == "in_progress"

    def test_refund_payment(self) -> None:
        response = self.client.post(
            "/api/admin/payments/pay-1/refund",
            headers=ADMIN_HEADERS,
            json={"reason": "Caregiver cancelled"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "refunded"
        assert data["refund_reason"] == "Caregiver cancelled"

    def test_user_status_invalid_value(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u1/status",
            headers=ADMIN_HEADERS,
            json={"status": "deleted"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Invalid status value. Must be one of: active, suspended, banned"
        )

    def test_user_status_on_admin_account(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u2/status",
            headers=ADMIN_HEADERS,
            json={"status": "suspended"},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Cannot modify admin accounts"

    def test_superadmin_updates_admin_account(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u2/status",
            headers=SUPERADMIN_HEADERS,
            json={"status": "suspended", "reason": "Security review"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User status updated to suspended"
        assert response.json()["data"]["status_updated_by"] == "root"

    def test_bulk_status(self) -> None:
        response = self.client.post(
            "/api/admin/users/bulk-status",
            headers=ADMIN_HEADERS,
            json={"userIds": ["u1", "u2", "u3"], "status": "suspended"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == {"processedCount": 2, "failedCount": 0}
        assert body["message"] == "Bulk status update processed for 2 users"

        u2 = self.client.get("/api/admin/users/u2", headers=ADMIN_HEADERS).json()
        assert u2["data"]["status"] == UserStatus.Active.value

    @pytest.mark.parametrize("payload", [{"status": "suspended"}, {"userIds": []}])
    def test_bulk_status_requires_ids(self, payload: dict) -> None:
        response = self.client.post(
            "/api/admin/users/bulk-status", headers=ADMIN_HEADERS, json=payload
        )

        assert response.status_code == 400
        assert response.json()["error"] == "userIds array is required"

    def test_audit_logs_pagination_and_filters(self) -> None:
        self.client.post("/api/admin/jobs/job-open/approve", headers=ADMIN_HEADERS)
        self.client.post("/api/admin/bookings/b-pending/confirm", headers=SUPERADMIN_HEADERS)
        self.client.post("/api/admin/payments/pay-1/refund", headers=ADMIN_HEADERS)

        page = self.client.get(
            "/api/admin/audit-logs", headers=ADMIN_HEADERS, params={"limit": 2, "page": 2}
        ).json()
        assert page["count"] == 3
        assert page["totalPages"] == 2
        assert page["currentPage"] == 2
        assert len(page["data"]) == 1

        by_root = self.client.get(
            "/api/admin/audit-logs", headers=ADMIN_HEADERS, params={"adminId": "root"}
        ).json()
        assert [entry["action"] for entry in by_root["data"]] == ["CONFIRM_BOOKING"]

        payments = self.client.get(
            "/api/admin/audit-logs", headers=ADMIN_HEADERS, params={"entityKind": "payment"}
        ).json()
        assert payments["data"][0]["entity_id"] == "pay-1"

    def test_audit_logs_empty(self) -> None:
        body = self.client.get("/api/admin/audit-logs", headers=ADMIN_HEADERS).json()

        assert body == {
            "success": True,
            "count": 0,
            "totalPages": 1,
            "currentPage": 1,
            "data": [],
        }

    def test_bulk_status_path_with_nested_segment(self) -> None:
        response = self.client.post(
            "/api/admin/users/bulk/status",
            headers=ADMIN_HEADERS,
            json={"userIds": ["u1"], "status": "banned"},
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"processedCount": 1, "failedCount": 0}

    def test_bulk_status_rejects_non_array_ids(self) -> None:
        response = self.client.post(
            "/api/admin/users/bulk/status",
            headers=ADMIN_HEADERS,
            json={"userIds": "u1", "status": "suspended"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "userIds array is required"}

    def test_malformed_body_uses_failure_envelope(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u1/status",
            headers=ADMIN_HEADERS,
            json={"status": ["active"]},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Invalid value for status")

    def test_audit_path_lists_entries(self) -> None:
        self.client.post("/api/admin/jobs/job-open/approve", headers=ADMIN_HEADERS)

        body = self.client.get("/api/admin/audit", headers=ADMIN_HEADERS).json()

        assert body["count"] == 1
        assert body["data"][0]["action"] == "APPROVE_JOB"

    def test_delete_user(self) -> None:
        response = self.client.delete("/api/admin/users/u1", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User deleted successfully"
        assert body["data"]["status"] == UserStatus.Inactive.value
        assert body["data"]["deleted_at"] is not None
        assert body["data"]["status_reason"] == "Account deleted by administrator"

    def test_delete_admin_account_is_forbidden(self) -> None:
        response = self.client.delete("/api/admin/users/u2", headers=ADMIN_HEADERS)

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Cannot delete admin accounts"}

    def test_delete_missing_user(self) -> None:
        response = self.client.delete("/api/admin/users/nobody", headers=ADMIN_HEADERS)

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_verify_caregiver_documents(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u3/verification",
            headers=ADMIN_HEADERS,
            json={"verificationStatus": "verified", "notes": "ID checked"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Documents verified successfully"
        assert body["data"]["status"] == VerificationStatus.Verified.value
        assert body["data"]["is_active"] is True
        assert body["data"]["verified_by"] == "admin-1"
        assert body["data"]["verification_notes"] == "ID checked"

    def test_verify_caregiver_documents_invalid_status(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u3/verification",
            headers=ADMIN_HEADERS,
            json={"verificationStatus": "approved"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Invalid verification status. Must be one of: pending, verified, rejected"
        )

    def test_verify_documents_without_profile(self) -> None:
        response = self.client.patch(
            "/api/admin/users/u1/verification",
            headers=ADMIN_HEADERS,
            json={"verificationStatus": "verified"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Caregiver not found"

    def test_user_status_history(self) -> None:
        self.client.patch(
            "/api/admin/users/u1/status",
            headers=ADMIN_HEADERS,
            json={"status": "suspended", "reason": "Spam"},
        )
        self.client.patch(
            "/api/admin/users/u1/status",
            headers=ADMIN_HEADERS,
            json={"status": "active"},
        )

        response = self.client.get("/api/admin/users/u1/status-history", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        history = response.json()["data"]
        assert [change["status"] for change in history] == ["active", "suspended"]
        assert history[1]["reason"] == "Spam"
        assert history[1]["changed_by"] == "admin-1"

    def test_status_history_for_missing_user(self) -> None:
        response = self.client.get(
            "/api/admin/users/nobody/status-history", headers=ADMIN_HEADERS
        )

        assert response.status_code == 404

"""Pytest configuration for the admin API tests."""

import pytest


@pytest.fixture(autouse=True)
def isolate_caredesk_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep backend selections from a developer environment out of the API tests."""
    for name in ("CAREDESK_AUDIT_BACKEND", "CAREDESK_NOTIFIER_BACKEND"):
        monkeypatch.delenv(name, raising=False)

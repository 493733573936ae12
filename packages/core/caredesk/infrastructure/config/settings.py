"""Configuration settings using pydantic-settings."""

from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackofficeSettings(BaseSettings):
    """Configuration settings for the caredesk back office.

    Settings can be loaded from environment variables or passed as a dictionary.
    Environment variables are prefixed with 'CAREDESK_' (e.g., CAREDESK_AUDIT_BACKEND=mongo).

    Example:
        ```python
        # From environment variables
        settings = BackofficeSettings()

        # From dictionary
        settings = BackofficeSettings.from_dict({"notifier_backend": "none"})
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="CAREDESK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Observability configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines; False renders human-readable console output",
    )

    # Audit trail configuration
    audit_backend: Literal["memory", "mongo"] = Field(
        default="memory",
        description="Audit store backend",
    )
    mongodb_url: str | None = Field(
        default=None,
        description="MongoDB connection string (required for the mongo audit backend)",
    )
    mongodb_database: str = Field(
        default="caredesk",
        description="MongoDB database name",
    )
    audit_collection: str = Field(
        default="admin_audit_logs",
        description="MongoDB collection holding audit entries",
    )
    status_history_collection: str = Field(
        default="user_status_history",
        description="MongoDB collection holding per-account status history",
    )
    audit_write_attempts: int = Field(
        default=2,
        description="Write attempts per audit entry before giving up",
        ge=1,
        le=10,
    )

    # Notification configuration
    notifier_backend: Literal["log", "webhook", "none"] = Field(
        default="log",
        description="Status-change notifier backend",
    )
    notification_webhook_url: str | None = Field(
        default=None,
        description="Endpoint the webhook notifier posts to",
    )
    notification_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for a single notification request in seconds",
        gt=0,
    )

    # Bulk operation configuration
    report_skipped_bulk_items: bool = Field(
        default=False,
        description="Report missing / not-permitted ids in bulk failures instead of skipping silently",
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "BackofficeSettings":
        """Check that the selected backends have their connection settings."""
        if self.audit_backend == "mongo" and not self.mongodb_url:
            raise ValueError("mongodb_url is required when audit_backend is 'mongo'")
        if self.notifier_backend == "webhook" and not self.notification_webhook_url:
            raise ValueError(
                "notification_webhook_url is required when notifier_backend is 'webhook'"
            )
        return self

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "BackofficeSettings":
        """Create settings from a dictionary.

        Args:
            config: Dictionary with configuration values.

        Returns:
            BackofficeSettings instance.
        """
        return cls(**config)

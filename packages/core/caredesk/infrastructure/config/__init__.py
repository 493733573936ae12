"""Configuration infrastructure module."""

from caredesk.infrastructure.config.settings import BackofficeSettings

__all__ = ["BackofficeSettings"]

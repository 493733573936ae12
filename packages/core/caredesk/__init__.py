"""caredesk - guarded status transitions for a caregiving marketplace back office."""

from caredesk.backoffice import Backoffice
from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.entity import EntityKind
from caredesk.infrastructure.config.settings import BackofficeSettings

__version__ = "0.1.0"

__all__ = ["Backoffice", "AdminContext", "EntityKind", "BackofficeSettings"]

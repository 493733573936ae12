"""
Dependency injection setup for the caredesk admin API.
"""

from functools import cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from caredesk.backoffice import Backoffice
from caredesk.domain.components.lifecycle_manager import LifecycleManager
from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.user import UserRole

ADMIN_ROLES = (UserRole.Admin, UserRole.SuperAdmin)


@cache
def get_backoffice() -> Backoffice:
    """Get a singleton Backoffice configured from CAREDESK_* environment variables."""
    return Backoffice()


def get_lifecycle_manager(
    backoffice: Annotated[Backoffice, Depends(get_backoffice)],
) -> LifecycleManager:
    return backoffice.lifecycle_manager


def get_acting_admin(
    x_admin_id: Annotated[str | None, Header()] = None,
    x_admin_role: Annotated[str | None, Header()] = None,
) -> AdminContext:
    """Resolve the acting administrator from the X-Admin-Id / X-Admin-Role headers.

    Authentication happens upstream; these headers carry the identity the
    gateway has already verified. The role defaults to ``admin``.

    Raises:
        HTTPException: 401 if the admin id is missing, 403 if the role is
            not an administrator role.
    """
    if not x_admin_id or not x_admin_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin authentication required",
        )

    try:
        role = UserRole((x_admin_role or UserRole.Admin.value).strip().lower())
    except ValueError:
        role = None

    if role not in ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

    return AdminContext(admin_id=x_admin_id.strip(), role=role)

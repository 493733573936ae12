"""Authorization predicates attached to transition requests."""

from caredesk.domain.components.transition_executor import AuthorizePredicate
from caredesk.domain.models.admin_context import AdminContext
from caredesk.domain.models.entity import TransitionableEntity
from caredesk.domain.models.user import User

ADMIN_ACCOUNT_DENIAL = "Cannot modify admin accounts"


def admin_account_guard(admin: AdminContext) -> AuthorizePredicate:
    """Build the predicate protecting administrator accounts.

    Only a superadmin may change the status of a user whose role is admin
    or superadmin. Every other entity is accepted.
    """

    def authorize(entity: TransitionableEntity) -> bool:
        if admin.is_superadmin:
            return True
        return not (isinstance(entity, User) and entity.is_admin_account)

    return authorize

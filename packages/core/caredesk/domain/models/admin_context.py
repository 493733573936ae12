"""AdminContext describing the administrator acting on a request."""

from pydantic import BaseModel, ConfigDict, Field

from caredesk.domain.models.user import UserRole


class AdminContext(BaseModel):
    """Acting administrator identity and role."""

    admin_id: str = Field(
        ...,
        description="Identifier of the acting administrator",
        min_length=1,
    )
    role: UserRole = Field(
        default=UserRole.Admin,
        description="Role of the acting administrator",
    )

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def is_superadmin(self) -> bool:
        return self.role == UserRole.SuperAdmin

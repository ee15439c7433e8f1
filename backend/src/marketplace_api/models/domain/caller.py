"""Authenticated caller context."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from marketplace_api.models.domain.role import RoleCode


class CallerContext(BaseModel):
    """Identity and roles of the user behind the current request."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    roles: list[RoleCode] = []
    azure_ad_b2c_id: str | None = None

    def has_role(self, role: RoleCode) -> bool:
        """Check if the caller holds a specific role."""
        return role in self.roles

"""RBAC DTOs."""

from pydantic import Field

from marketplace_api.models.domain.role import RoleCode
from marketplace_api.models.dto.base import CamelModel


class RoleAssignmentRequest(CamelModel):
    """Assign role request."""

    role_code: RoleCode


class RoleAssignmentResponse(CamelModel):
    """Role assignment/removal outcome."""

    success: bool
    message: str


class UserPermissionsResponse(CamelModel):
    """Resolved permission codes of a user."""

    permissions: list[str] = Field(default_factory=list)

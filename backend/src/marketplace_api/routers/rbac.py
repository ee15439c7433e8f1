"""RBAC router for role assignments and permission lookups."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from marketplace_api.dependencies import get_rbac_service
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode
from marketplace_api.models.dto.rbac import (
    RoleAssignmentRequest,
    RoleAssignmentResponse,
    UserPermissionsResponse,
)
from marketplace_api.security.auth import get_current_caller
from marketplace_api.security.authorization import Capability, require_capability
from marketplace_api.services.rbac_service import RbacService

router = APIRouter()


@router.get("/me/permissions", response_model=UserPermissionsResponse)
async def get_my_permissions(
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[RbacService, Depends(get_rbac_service)],
) -> UserPermissionsResponse:
    """Get the permissions granted to the caller through their roles."""
    return await service.resolve_user_permissions(caller.id)


@router.post("/users/{user_id}/roles", response_model=RoleAssignmentResponse)
async def assign_role(
    user_id: UUID,
    request: RoleAssignmentRequest,
    caller: Annotated[CallerContext, Depends(require_capability(Capability.MANAGE_ROLES))],
    service: Annotated[RbacService, Depends(get_rbac_service)],
) -> RoleAssignmentResponse:
    """Assign a role to a user. Administrators only."""
    return await service.assign_role(caller, user_id, request.role_code)


@router.delete("/users/{user_id}/roles/{role_code}", response_model=RoleAssignmentResponse)
async def remove_role(
    user_id: UUID,
    role_code: RoleCode,
    caller: Annotated[CallerContext, Depends(require_capability(Capability.MANAGE_ROLES))],
    service: Annotated[RbacService, Depends(get_rbac_service)],
) -> RoleAssignmentResponse:
    """Remove a role from a user. Administrators only.

    A user's last remaining role cannot be removed.
    """
    return await service.remove_role(caller, user_id, role_code)

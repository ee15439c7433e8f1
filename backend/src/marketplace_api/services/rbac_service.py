"""Role and permission management service."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.exceptions import LastRoleRemovalError, RoleNotFoundError, UserNotFoundError
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode
from marketplace_api.models.dto.rbac import RoleAssignmentResponse, UserPermissionsResponse
from marketplace_api.models.orm.role import RoleORM
from marketplace_api.repositories.permission_repository import PermissionRepository
from marketplace_api.repositories.role_repository import RoleRepository
from marketplace_api.repositories.user_repository import UserRepository
from marketplace_api.security.authorization import Capability, ensure_capability

logger = logging.getLogger(__name__)


class RbacService:
    """Service for role assignments and permission resolution."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.role_repo = RoleRepository(session)
        self.permission_repo = PermissionRepository(session)
        self.user_repo = UserRepository(session)

    async def resolve_user_permissions(self, user_id: UUID) -> UserPermissionsResponse:
        """Resolve the permission codes a user holds through their roles.

        Args:
            user_id: User UUID

        Returns:
            Sorted, de-duplicated permission codes
        """
        codes = await self.permission_repo.get_codes_for_user(user_id)
        return UserPermissionsResponse(permissions=codes)

    async def has_permission(self, user_id: UUID, permission_code: str) -> bool:
        """Check whether a user holds a permission through any of their roles."""
        codes = await self.permission_repo.get_codes_for_user(user_id)
        return permission_code in codes

    async def _resolve_target(
        self, user_id: UUID, role_code: RoleCode, lock_user: bool = False
    ) -> RoleORM:
        if lock_user:
            user = await self.user_repo.get_for_update(user_id)
        else:
            user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        role = await self.role_repo.get_by_code(role_code.value)
        if role is None:
            raise RoleNotFoundError(role_code.value)
        return role

    async def assign_role(
        self,
        caller: CallerContext,
        user_id: UUID,
        role_code: RoleCode,
    ) -> RoleAssignmentResponse:
        """Assign a role to a user.

        Assigning a role the user already holds is reported as an
        unsuccessful no-op, not an error.

        Args:
            caller: Administrator performing the change
            user_id: Target user UUID
            role_code: Role to assign

        Returns:
            Assignment outcome

        Raises:
            ForbiddenError: If the caller is not an administrator
            UserNotFoundError: If the target user does not exist
            RoleNotFoundError: If the role is not defined
        """
        ensure_capability(caller, Capability.MANAGE_ROLES)
        role = await self._resolve_target(user_id, role_code)

        if await self.role_repo.get_user_role(user_id, role.id) is not None:
            return RoleAssignmentResponse(success=False, message="User already has this role")

        await self.role_repo.assign_to_user(user_id, role.id, assigned_by=caller.id)
        logger.info(f"Role '{role_code}' assigned to user {user_id} by {caller.id}")
        return RoleAssignmentResponse(success=True, message=f"Role '{role_code}' assigned")

    async def remove_role(
        self,
        caller: CallerContext,
        user_id: UUID,
        role_code: RoleCode,
    ) -> RoleAssignmentResponse:
        """Remove a role from a user, never leaving the user without a role.

        The user row is locked, the assignment deleted and the remaining roles
        counted. When none remain the error is raised with the deletion still
        uncommitted, so the request transaction discards it.

        Args:
            caller: Administrator performing the change
            user_id: Target user UUID
            role_code: Role to remove

        Returns:
            Removal outcome

        Raises:
            ForbiddenError: If the caller is not an administrator
            UserNotFoundError: If the target user does not exist
            RoleNotFoundError: If the role is not defined
            LastRoleRemovalError: If this is the user's only role
        """
        ensure_capability(caller, Capability.MANAGE_ROLES)
        role = await self._resolve_target(user_id, role_code, lock_user=True)

        if await self.role_repo.get_user_role(user_id, role.id) is None:
            return RoleAssignmentResponse(success=False, message="User does not have this role")

        await self.role_repo.remove_from_user(user_id, role.id)
        if await self.role_repo.count_user_roles(user_id) == 0:
            raise LastRoleRemovalError(str(user_id))

        logger.info(f"Role '{role_code}' removed from user {user_id} by {caller.id}")
        return RoleAssignmentResponse(success=True, message=f"Role '{role_code}' removed")

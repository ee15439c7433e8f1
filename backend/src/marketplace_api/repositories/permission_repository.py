"""Permission repository."""

from uuid import UUID

from sqlalchemy import select

from marketplace_api.models.orm.permission import PermissionORM
from marketplace_api.models.orm.role_permission import RolePermissionORM
from marketplace_api.models.orm.user_role import UserRoleORM
from marketplace_api.repositories.base import BaseRepository


class PermissionRepository(BaseRepository[PermissionORM]):
    """Repository for permission operations."""

    model = PermissionORM

    async def get_by_code(self, code: str) -> PermissionORM | None:
        """Get permission by code."""
        result = await self.session.execute(
            select(PermissionORM).where(PermissionORM.code == code)
        )
        return result.scalar_one_or_none()

    async def create_permission(self, code: str, description: str | None = None) -> PermissionORM:
        """Create a new permission.

        Raises:
            IntegrityError: If the code is already taken
        """
        return await self.create(code=code, description=description)

    async def get_codes_for_user(self, user_id: UUID) -> list[str]:
        """Resolve permission codes granted to a user through their roles.

        Follows UserRole -> RolePermission -> Permission. Codes are
        de-duplicated and sorted.

        Args:
            user_id: User UUID

        Returns:
            Permission codes
        """
        result = await self.session.execute(
            select(PermissionORM.code)
            .join(RolePermissionORM, RolePermissionORM.permission_id == PermissionORM.id)
            .join(UserRoleORM, UserRoleORM.role_id == RolePermissionORM.role_id)
            .where(UserRoleORM.user_id == user_id)
            .distinct()
            .order_by(PermissionORM.code)
        )
        return list(result.scalars().all())

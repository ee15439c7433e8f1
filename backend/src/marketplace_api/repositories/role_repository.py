"""Role repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from marketplace_api.models.orm.role import RoleORM
from marketplace_api.models.orm.role_permission import RolePermissionORM
from marketplace_api.models.orm.user_role import UserRoleORM
from marketplace_api.repositories.base import BaseRepository


class RoleRepository(BaseRepository[RoleORM]):
    """Repository for role operations."""

    model = RoleORM

    async def get_by_code(self, code: str) -> RoleORM | None:
        """Get role by code.

        Args:
            code: Role code

        Returns:
            RoleORM or None if not found
        """
        result = await self.session.execute(
            select(RoleORM).options(selectinload(RoleORM.permissions)).where(RoleORM.code == code)
        )
        return result.scalar_one_or_none()

    async def get_all_ordered(self) -> list[RoleORM]:
        """Get all roles ordered by hierarchy level."""
        result = await self.session.execute(
            select(RoleORM).options(selectinload(RoleORM.permissions)).order_by(RoleORM.level)
        )
        return list(result.scalars().all())

    async def create_role(
        self,
        code: str,
        name: str,
        level: int,
        description: str | None = None,
    ) -> RoleORM:
        """Create a new role.

        Raises:
            IntegrityError: If the code or level is already taken
        """
        return await self.create(code=code, name=name, level=level, description=description)

    async def add_permission(self, role_id: UUID, permission_id: UUID) -> None:
        """Link a permission to a role."""
        self.session.add(RolePermissionORM(role_id=role_id, permission_id=permission_id))
        await self.session.flush()

    async def get_permission_ids(self, role_id: UUID) -> set[UUID]:
        """Get the ids of the permissions linked to a role."""
        result = await self.session.execute(
            select(RolePermissionORM.permission_id).where(RolePermissionORM.role_id == role_id)
        )
        return set(result.scalars().all())

    async def get_user_role(self, user_id: UUID, role_id: UUID) -> UserRoleORM | None:
        """Get a user's assignment of a role, if any."""
        result = await self.session.execute(
            select(UserRoleORM)
            .where(UserRoleORM.user_id == user_id)
            .where(UserRoleORM.role_id == role_id)
        )
        return result.scalar_one_or_none()

    async def assign_to_user(
        self, user_id: UUID, role_id: UUID, assigned_by: UUID | None = None
    ) -> UserRoleORM:
        """Assign a role to a user."""
        assignment = UserRoleORM(user_id=user_id, role_id=role_id, assigned_by=assigned_by)
        self.session.add(assignment)
        await self.session.flush()
        return assignment

    async def remove_from_user(self, user_id: UUID, role_id: UUID) -> None:
        """Remove a role assignment from a user."""
        await self.session.execute(
            delete(UserRoleORM)
            .where(UserRoleORM.user_id == user_id)
            .where(UserRoleORM.role_id == role_id)
        )
        await self.session.flush()

    async def count_user_roles(self, user_id: UUID) -> int:
        """Count the roles assigned to a user."""
        result = await self.session.execute(
            select(func.count(UserRoleORM.role_id)).where(UserRoleORM.user_id == user_id)
        )
        return result.scalar_one()

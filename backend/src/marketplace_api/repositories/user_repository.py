"""User repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from marketplace_api.models.orm.user import UserORM
from marketplace_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserORM]):
    """Repository for marketplace users."""

    model = UserORM

    async def get_with_roles(self, user_id: UUID) -> UserORM | None:
        """Get user with roles loaded."""
        result = await self.session.execute(
            select(UserORM).options(selectinload(UserORM.roles)).where(UserORM.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_azure_ad_b2c_id(self, azure_ad_b2c_id: str) -> UserORM | None:
        """Get user by Azure AD B2C object id, with roles loaded."""
        result = await self.session.execute(
            select(UserORM)
            .options(selectinload(UserORM.roles))
            .where(UserORM.azure_ad_b2c_id == azure_ad_b2c_id)
        )
        return result.scalar_one_or_none()

    async def get_azure_ad_b2c_id(self, user_id: UUID) -> str | None:
        """Get only the Azure AD B2C object id of a user."""
        result = await self.session.execute(
            select(UserORM.azure_ad_b2c_id).where(UserORM.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, user_id: UUID) -> UserORM | None:
        """Get a user and lock its row until the end of the transaction."""
        result = await self.session.execute(
            select(UserORM).where(UserORM.id == user_id).with_for_update()
        )
        return result.scalar_one_or_none()

"""Tests for schema-level constraints of the RBAC and configuration tables."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.models.orm import (
    ConfigFeatureORM,
    ConfigParameterORM,
    PermissionORM,
    RoleORM,
    UserORM,
)
from marketplace_api.repositories.permission_repository import PermissionRepository
from marketplace_api.repositories.role_repository import RoleRepository


class TestUniqueConstraints:
    """Duplicate codes and keys are rejected by the database."""

    async def test_duplicate_role_code(self, session: AsyncSession) -> None:
        repo = RoleRepository(session)
        await repo.create_role(code="buyer", name="Buyer", level=1)

        with pytest.raises(IntegrityError):
            await repo.create_role(code="buyer", name="Another buyer", level=7)

    async def test_duplicate_role_level(self, session: AsyncSession) -> None:
        repo = RoleRepository(session)
        await repo.create_role(code="buyer", name="Buyer", level=1)

        with pytest.raises(IntegrityError):
            await repo.create_role(code="reseller", name="Reseller", level=1)

    async def test_duplicate_permission_code(self, session: AsyncSession) -> None:
        repo = PermissionRepository(session)
        await repo.create_permission(code="listing.view")

        with pytest.raises(IntegrityError):
            await repo.create_permission(code="listing.view", description="again")

    async def test_duplicate_feature_code(self, session: AsyncSession) -> None:
        session.add(ConfigFeatureORM(code="listing.favorites", name="Favorites"))
        await session.flush()

        session.add(ConfigFeatureORM(code="listing.favorites", name="Favorites again"))
        with pytest.raises(IntegrityError):
            await session.flush()

    async def test_duplicate_parameter_key(self, session: AsyncSession) -> None:
        session.add(ConfigParameterORM(key="session.timeout", value="30"))
        await session.flush()

        session.add(ConfigParameterORM(key="session.timeout", value="45"))
        with pytest.raises(IntegrityError):
            await session.flush()

    async def test_duplicate_azure_ad_b2c_id(self, session: AsyncSession) -> None:
        session.add(UserORM(email="a@example.com", azure_ad_b2c_id="azure-id-1"))
        await session.flush()

        session.add(UserORM(email="b@example.com", azure_ad_b2c_id="azure-id-1"))
        with pytest.raises(IntegrityError):
            await session.flush()

    async def test_users_without_provider_id_may_coexist(self, session: AsyncSession) -> None:
        session.add_all(
            [
                UserORM(email="a@example.com", azure_ad_b2c_id=None),
                UserORM(email="b@example.com", azure_ad_b2c_id=None),
            ]
        )
        await session.flush()


class TestRoleRepository:
    """Tests for role/permission links and user assignments."""

    async def test_role_permissions_are_loaded_by_code(
        self, seeded_session: AsyncSession, session_factory
    ) -> None:
        async with session_factory() as fresh_session:
            role = await RoleRepository(fresh_session).get_by_code("moderator")

        assert isinstance(role, RoleORM)
        assert sorted(p.code for p in role.permissions) == ["listing.moderate", "listing.view"]
        assert all(isinstance(p, PermissionORM) for p in role.permissions)

    async def test_roles_ordered_by_level(self, seeded_session: AsyncSession) -> None:
        roles = await RoleRepository(seeded_session).get_all_ordered()

        assert [r.code for r in roles] == [
            "visitor",
            "buyer",
            "private_seller",
            "professional_seller",
            "moderator",
            "administrator",
        ]

    async def test_assign_and_count_user_roles(self, seeded_session, make_user) -> None:
        repo = RoleRepository(seeded_session)
        user = await make_user("user@example.com", ["buyer"])
        seller = await repo.get_by_code("private_seller")

        await repo.assign_to_user(user.id, seller.id)

        assert await repo.count_user_roles(user.id) == 2
        assert await repo.get_user_role(user.id, seller.id) is not None

        await repo.remove_from_user(user.id, seller.id)

        assert await repo.count_user_roles(user.id) == 1

"""Tests for runtime configuration parameters and feature flags."""

from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode
from marketplace_api.repositories.config_repository import ConfigRepository
from marketplace_api.services.config_service import ConfigService


class TestConfigParameters:
    """Tests for namespace projection of configuration parameters."""

    async def test_session_parameters(self, seeded_session: AsyncSession) -> None:
        parameters = await ConfigService(seeded_session).get_session_parameters()

        assert [(p.key, p.value) for p in parameters] == [
            ("session.inactivity.timeout.minutes", "30"),
            ("session.timeout.warning.minutes", "5"),
        ]

    async def test_other_namespaces_are_not_exposed(self, seeded_session: AsyncSession) -> None:
        parameters = await ConfigService(seeded_session).get_session_parameters()

        assert all(p.key.startswith("session.") for p in parameters)

    async def test_prefix_is_matched_literally(self, session: AsyncSession) -> None:
        repo = ConfigRepository(session)
        await repo.add_parameter("session_x.timeout", "1")
        await repo.add_parameter("session.timeout", "2")

        parameters = await ConfigService(session).get_parameters("session.")

        assert [p.key for p in parameters] == ["session.timeout"]

    async def test_serialized_in_camel_case(self, session: AsyncSession) -> None:
        await ConfigRepository(session).add_parameter("session.a", "1", description="A")

        parameters = await ConfigService(session).get_parameters("session.")

        assert parameters[0].model_dump(by_alias=True) == {
            "key": "session.a",
            "value": "1",
            "description": "A",
        }


class TestFeatureFlags:
    """Tests for feature availability."""

    def _caller(self, *roles: RoleCode) -> CallerContext:
        return CallerContext(id=uuid4(), roles=list(roles))

    async def test_only_active_features_are_listed(self, seeded_session: AsyncSession) -> None:
        features = await ConfigService(seeded_session).list_active_features()

        codes = [f.code for f in features]
        assert "vehicle.history_report" not in codes
        assert codes == sorted(codes)
        assert any(f.requires_auth for f in features)

    async def test_public_feature_for_anonymous(self, seeded_session: AsyncSession) -> None:
        service = ConfigService(seeded_session)

        assert await service.is_feature_available("listing.browse", None)

    async def test_auth_feature_requires_caller(self, seeded_session: AsyncSession) -> None:
        service = ConfigService(seeded_session)

        assert not await service.is_feature_available("listing.favorites", None)
        assert await service.is_feature_available(
            "listing.favorites", self._caller(RoleCode.BUYER)
        )

    async def test_role_restricted_feature(self, seeded_session: AsyncSession) -> None:
        service = ConfigService(seeded_session)

        assert not await service.is_feature_available(
            "listing.publish", self._caller(RoleCode.BUYER)
        )
        assert await service.is_feature_available(
            "listing.publish", self._caller(RoleCode.BUYER, RoleCode.PRIVATE_SELLER)
        )

    async def test_inactive_and_unknown_features(self, seeded_session: AsyncSession) -> None:
        service = ConfigService(seeded_session)
        caller = self._caller(RoleCode.ADMINISTRATOR)

        assert not await service.is_feature_available("vehicle.history_report", caller)
        assert not await service.is_feature_available("does.not.exist", caller)

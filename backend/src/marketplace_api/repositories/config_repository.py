"""Configuration repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.models.orm.config import ConfigFeatureORM, ConfigParameterORM


class ConfigRepository:
    """Repository for configuration parameters and feature flags."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_parameter(self, key: str) -> ConfigParameterORM | None:
        """Get a parameter by key."""
        result = await self.session.execute(
            select(ConfigParameterORM).where(ConfigParameterORM.key == key)
        )
        return result.scalar_one_or_none()

    async def get_parameters_by_prefix(self, prefix: str) -> list[ConfigParameterORM]:
        """Get all parameters whose key starts with ``prefix``.

        The prefix is matched literally (``%`` and ``_`` carry no wildcard
        meaning).

        Args:
            prefix: Key namespace, e.g. ``"session."``

        Returns:
            Matching parameters ordered by key
        """
        result = await self.session.execute(
            select(ConfigParameterORM)
            .where(ConfigParameterORM.key.startswith(prefix, autoescape=True))
            .order_by(ConfigParameterORM.key)
        )
        return list(result.scalars().all())

    async def get_feature(self, code: str) -> ConfigFeatureORM | None:
        """Get a feature flag by code."""
        result = await self.session.execute(
            select(ConfigFeatureORM).where(ConfigFeatureORM.code == code)
        )
        return result.scalar_one_or_none()

    async def get_active_features(self) -> list[ConfigFeatureORM]:
        """Get all active feature flags ordered by code."""
        result = await self.session.execute(
            select(ConfigFeatureORM)
            .where(ConfigFeatureORM.is_active == True)  # noqa: E712
            .order_by(ConfigFeatureORM.code)
        )
        return list(result.scalars().all())

    async def add_parameter(
        self, key: str, value: str, description: str | None = None, category: str | None = None
    ) -> ConfigParameterORM:
        """Insert a parameter."""
        parameter = ConfigParameterORM(
            key=key, value=value, description=description, category=category
        )
        self.session.add(parameter)
        await self.session.flush()
        return parameter

    async def add_feature(
        self,
        code: str,
        name: str,
        requires_auth: bool = False,
        required_role: str | None = None,
        is_active: bool = True,
    ) -> ConfigFeatureORM:
        """Insert a feature flag."""
        feature = ConfigFeatureORM(
            code=code,
            name=name,
            requires_auth=requires_auth,
            required_role=required_role,
            is_active=is_active,
        )
        self.session.add(feature)
        await self.session.flush()
        return feature

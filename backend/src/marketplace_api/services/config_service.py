"""Runtime configuration service (parameters and feature flags)."""

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.config import get_settings
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.dto.config import ConfigFeatureResponse, ConfigParameterResponse
from marketplace_api.repositories.config_repository import ConfigRepository


class ConfigService:
    """Service for reading configuration parameters and feature flags."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.config_repo = ConfigRepository(session)

    async def get_parameters(self, namespace: str) -> list[ConfigParameterResponse]:
        """Get the parameters of a key namespace.

        Args:
            namespace: Key prefix, e.g. ``"session."``

        Returns:
            Parameters whose key starts with the namespace, ordered by key
        """
        parameters = await self.config_repo.get_parameters_by_prefix(namespace)
        return [
            ConfigParameterResponse(key=p.key, value=p.value, description=p.description)
            for p in parameters
        ]

    async def get_session_parameters(self) -> list[ConfigParameterResponse]:
        """Get the session parameters exposed to authenticated clients."""
        return await self.get_parameters(get_settings().session_config_namespace)

    async def list_active_features(self) -> list[ConfigFeatureResponse]:
        """List active feature flags."""
        features = await self.config_repo.get_active_features()
        return [ConfigFeatureResponse.model_validate(f) for f in features]

    async def is_feature_available(self, code: str, caller: CallerContext | None) -> bool:
        """Check whether a feature is available to a caller.

        Args:
            code: Feature code
            caller: Current caller, or None for anonymous requests

        Returns:
            False if the feature is unknown or inactive, requires
            authentication and there is no caller, or requires a role the
            caller does not hold
        """
        feature = await self.config_repo.get_feature(code)
        if feature is None or not feature.is_active:
            return False
        if feature.requires_auth and caller is None:
            return False
        if feature.required_role:
            return caller is not None and feature.required_role in caller.roles
        return True

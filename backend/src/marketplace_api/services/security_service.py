"""Account security service (two-factor authentication)."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.exceptions import (
    DependencyFailureError,
    MarketplaceAPIError,
    UnauthenticatedError,
    UserNotFoundError,
)
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.dto.security import ToggleMfaResponse
from marketplace_api.providers.identity.bridge import IdentityBridge
from marketplace_api.repositories.user_repository import UserRepository
from marketplace_api.security.authorization import Capability, ensure_capability
from marketplace_api.utils.secure_logging import log_error, mask_identifier

logger = logging.getLogger(__name__)

MISSING_IDENTITY_MESSAGE = "User not found or missing Azure AD B2C ID"
MFA_UPDATE_FAILED_MESSAGE = "Failed to update MFA settings"


class SecurityService:
    """Service for account security settings."""

    def __init__(self, session: AsyncSession, identity_bridge: IdentityBridge) -> None:
        """Initialize service with database session and identity bridge."""
        self.session = session
        self.identity_bridge = identity_bridge
        self.user_repo = UserRepository(session)

    async def toggle_mfa(self, caller: CallerContext | None, enable: bool) -> ToggleMfaResponse:
        """Enable or disable per-user MFA on the caller's Azure AD B2C account.

        Preconditions are checked in order and fail before any external call:
        authentication, seller role, then a linked Azure AD B2C identity.

        Args:
            caller: Authenticated caller, or None
            enable: True to enforce MFA, False to clear the requirement

        Returns:
            Outcome mirroring the requested state

        Raises:
            UnauthenticatedError: If there is no caller
            ForbiddenError: If the caller holds no seller role
            UserNotFoundError: If the user has no Azure AD B2C identity
            DependencyFailureError: If the identity provider update fails
        """
        if caller is None:
            raise UnauthenticatedError()

        ensure_capability(caller, Capability.MANAGE_MFA)

        try:
            azure_ad_b2c_id = await self.user_repo.get_azure_ad_b2c_id(caller.id)
            if not azure_ad_b2c_id:
                raise UserNotFoundError(str(caller.id), MISSING_IDENTITY_MESSAGE)

            client = await self.identity_bridge.get_client()
            await client.set_mfa_requirements(azure_ad_b2c_id, enable)
        except MarketplaceAPIError:
            raise
        except Exception as e:
            log_error(logger, f"MFA update failed for user {caller.id}", e)
            raise DependencyFailureError(MFA_UPDATE_FAILED_MESSAGE) from e

        mfa_status = "enabled" if enable else "disabled"
        logger.info(
            f"MFA {mfa_status} for user {caller.id} "
            f"(identity {mask_identifier(azure_ad_b2c_id)})"
        )
        return ToggleMfaResponse(success=True, mfa_status=mfa_status)

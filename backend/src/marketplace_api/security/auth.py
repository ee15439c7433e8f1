"""Authentication utilities."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.config import Settings, get_settings
from marketplace_api.database import get_db
from marketplace_api.exceptions import UnauthenticatedError
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode
from marketplace_api.repositories.user_repository import UserRepository
from marketplace_api.security.jwks import JwksKeySet, get_key_set

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def decode_token(
    token: str,
    settings: Settings | None = None,
    key_set: JwksKeySet | None = None,
) -> dict:
    """Decode and verify a JWT token.

    Azure AD B2C tokens are verified against the user flow's signing key
    selected by the token's ``kid`` header. HS* algorithms use the shared
    secret instead.

    Args:
        token: JWT token string
        settings: Settings to use (defaults to the application settings)
        key_set: Signing keys (defaults to the configured user flow's)

    Returns:
        Token payload

    Raises:
        UnauthenticatedError: If token is invalid or expired
        DependencyFailureError: If the signing keys cannot be loaded
    """
    settings = settings or get_settings()
    options = {
        "verify_aud": settings.jwt_audience is not None,
        "verify_iss": settings.jwt_issuer is not None,
    }

    try:
        if settings.uses_shared_secret:
            key: str | dict = settings.jwt_secret or ""
        else:
            header = jwt.get_unverified_header(token)
            key = await (key_set or get_key_set()).get_key(header.get("kid"))

        return jwt.decode(
            token,
            key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options=options,
        )
    except JWTError as e:
        raise UnauthenticatedError("Invalid or expired token") from e


async def resolve_caller(session: AsyncSession, subject: str) -> CallerContext | None:
    """Build the caller context for a token subject.

    The subject is the Azure AD B2C object id. Role codes this service does
    not know are dropped.

    Args:
        session: Database session
        subject: Token ``sub`` claim

    Returns:
        CallerContext or None if no active user matches
    """
    user = await UserRepository(session).get_by_azure_ad_b2c_id(subject)
    if user is None or not user.is_active:
        return None

    return CallerContext(
        id=user.id,
        email=user.email,
        roles=RoleCode.parse([role.code for role in user.roles]),
        azure_ad_b2c_id=user.azure_ad_b2c_id,
    )


async def get_optional_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CallerContext | None:
    """Get the caller if a valid bearer token is present, else None."""
    if credentials is None or not credentials.credentials:
        return None

    try:
        payload = await decode_token(credentials.credentials)
    except UnauthenticatedError:
        logger.info("Rejected bearer token")
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    return await resolve_caller(db, subject)


async def get_current_caller(
    caller: Annotated[CallerContext | None, Depends(get_optional_caller)],
) -> CallerContext:
    """Get the authenticated caller.

    Raises:
        UnauthenticatedError: If no valid identity is attached to the request
    """
    if caller is None:
        raise UnauthenticatedError()
    return caller

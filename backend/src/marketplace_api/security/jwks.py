"""Signing keys of the Azure AD B2C user flow."""

import asyncio
import logging
import time
from functools import lru_cache
from typing import Any

import httpx

from marketplace_api.config import get_settings
from marketplace_api.exceptions import DependencyFailureError, UnauthenticatedError
from marketplace_api.utils.secure_logging import log_warning

logger = logging.getLogger(__name__)


class JwksKeySet:
    """JSON Web Key Set fetched from a JWKS endpoint and cached by key id.

    Keys are refreshed when the cache expires. A token carrying an unknown
    ``kid`` forces a refresh so rotated keys are picked up before the cache
    would expire; forced refreshes happen at most once per
    ``min_refresh_seconds``.
    """

    def __init__(
        self,
        jwks_url: str,
        cache_seconds: int = 3600,
        min_refresh_seconds: int = 60,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the key set.

        Args:
            jwks_url: JWKS endpoint URL
            cache_seconds: How long fetched keys are trusted
            min_refresh_seconds: Minimum interval between forced refreshes
            timeout: Request timeout when no client is given
            http_client: Optional HTTP client (owned by the caller if given)
        """
        self.jwks_url = jwks_url
        self.cache_seconds = cache_seconds
        self.min_refresh_seconds = min_refresh_seconds
        self.timeout = timeout
        self._http_client = http_client
        self._keys: dict[str, dict[str, Any]] = {}
        self._fetched_at: float | None = None
        self._lock = asyncio.Lock()

    def _age(self) -> float | None:
        if self._fetched_at is None:
            return None
        return time.monotonic() - self._fetched_at

    def _is_fresh(self) -> bool:
        age = self._age()
        return age is not None and age < self.cache_seconds

    async def _fetch(self) -> dict[str, dict[str, Any]]:
        try:
            if self._http_client is not None:
                response = await self._http_client.get(self.jwks_url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.jwks_url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log_warning(logger, "Failed to load token signing keys", e)
            raise DependencyFailureError("Token signing keys unavailable") from e

        if not isinstance(data, dict):
            raise DependencyFailureError("Token signing keys unavailable")
        keys = {key["kid"]: key for key in data.get("keys", []) if key.get("kid")}
        logger.info(f"Loaded {len(keys)} token signing key(s)")
        return keys

    async def _refresh(self, force: bool) -> None:
        async with self._lock:
            # Another caller may have refreshed while this one waited
            age = self._age()
            if force and age is not None and age < self.min_refresh_seconds:
                return
            if not force and self._is_fresh():
                return
            self._keys = await self._fetch()
            self._fetched_at = time.monotonic()

    async def get_key(self, kid: str | None) -> dict[str, Any]:
        """Get the JWK a token was signed with.

        Args:
            kid: ``kid`` header of the token

        Returns:
            The matching JWK

        Raises:
            UnauthenticatedError: If no key matches ``kid``
            DependencyFailureError: If the JWKS endpoint cannot be read
        """
        if not kid:
            raise UnauthenticatedError("Invalid or expired token")

        if not self._is_fresh():
            await self._refresh(force=False)
        key = self._keys.get(kid)
        if key is None:
            await self._refresh(force=True)
            key = self._keys.get(kid)
        if key is None:
            raise UnauthenticatedError("Invalid or expired token")
        return key


@lru_cache
def get_key_set() -> JwksKeySet:
    """Get the process-wide key set of the configured user flow.

    Raises:
        RuntimeError: If no JWKS endpoint is configured
    """
    settings = get_settings()
    if not settings.jwks_url:
        raise RuntimeError("AZURE_AD_B2C_TENANT_NAME or JWT_JWKS_URL must be set")
    return JwksKeySet(
        settings.jwks_url,
        cache_seconds=settings.jwks_cache_seconds,
        timeout=settings.http_timeout_seconds,
    )

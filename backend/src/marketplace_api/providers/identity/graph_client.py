"""Microsoft Graph client for Azure AD B2C user accounts."""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx
from azure.core.credentials import TokenCredential

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"

MFA_ENFORCED = {"perUserMfaState": "enforced"}


class GraphClient:
    """Minimal Microsoft Graph client for reading and patching users.

    Every request asks the credential for a current access token; the
    credential object is responsible for caching and refreshing it. A failing
    token acquisition fails the request.
    """

    def __init__(
        self,
        credential: TokenCredential,
        base_url: str = GRAPH_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the Graph client.

        Args:
            credential: Azure credential (e.g. ClientSecretCredential)
            base_url: Graph API base URL
            http_client: Optional HTTP client (owned by the caller if given)
            timeout: Request timeout in seconds when creating a client
        """
        self.credential = credential
        self.base_url = base_url.rstrip("/")
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def _get_access_token(self) -> str:
        # get_token blocks on network I/O, keep it off the event loop
        access_token = await asyncio.to_thread(self.credential.get_token, GRAPH_SCOPE)
        return access_token.token

    async def _request(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        token = await self._get_access_token()
        response = await self._http_client.request(
            method,
            f"{self.base_url}{path}",
            headers={"Authorization": f"Bearer {token}"},
            json=json_data,
            params=params,
        )
        response.raise_for_status()
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _user_path(user_id: str) -> str:
        return f"/users/{quote(user_id, safe='')}"

    async def get_user(self, user_id: str, select: list[str] | None = None) -> dict[str, Any]:
        """Read a user resource.

        Args:
            user_id: Azure AD B2C object id
            select: Optional list of properties to return

        Returns:
            User resource as returned by Graph
        """
        params = {"$select": ",".join(select)} if select else None
        return await self._request("GET", self._user_path(user_id), params=params) or {}

    async def update_user(self, user_id: str, data: dict[str, Any]) -> None:
        """Patch a user resource.

        Args:
            user_id: Azure AD B2C object id
            data: Properties to set
        """
        await self._request("PATCH", self._user_path(user_id), json_data=data)

    async def set_mfa_requirements(self, user_id: str, enabled: bool) -> None:
        """Replace the user's strong authentication requirements.

        Enabling sets exactly one enforced requirement, disabling clears the
        list. Any other requirement previously present is dropped.

        Args:
            user_id: Azure AD B2C object id
            enabled: Whether MFA should be enforced
        """
        requirements = [dict(MFA_ENFORCED)] if enabled else []
        await self.update_user(user_id, {"strongAuthenticationRequirements": requirements})

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client and not self._http_client.is_closed:
            await self._http_client.aclose()

"""Process-wide, lazily constructed Graph client holder."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

from azure.identity import ClientSecretCredential

from marketplace_api.config import Settings
from marketplace_api.providers.identity.graph_client import GRAPH_SCOPE, GraphClient
from marketplace_api.utils.secure_logging import log_warning

logger = logging.getLogger(__name__)

GraphClientFactory = Callable[[], GraphClient | Awaitable[GraphClient]]


class BridgeState(StrEnum):
    """Lifecycle of the bridge's client."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class IdentityBridge:
    """Owns the single authenticated Graph client of the process.

    The bridge is created by the application's composition root and handed
    to request handlers through dependency injection. The client is built on
    first use; concurrent first callers wait on a lock and all observe the
    same instance. The client is published only after it was constructed
    successfully, a failing factory leaves the bridge uninitialized.
    """

    def __init__(self, factory: GraphClientFactory) -> None:
        """Initialize the bridge.

        Args:
            factory: Builds the Graph client (credential included); may be
                a coroutine function
        """
        self._factory = factory
        self._client: GraphClient | None = None
        self._state = BridgeState.UNINITIALIZED
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityBridge":
        """Create a bridge using Azure AD B2C client-credential settings."""

        async def factory() -> GraphClient:
            credential = ClientSecretCredential(
                settings.azure_ad_b2c_tenant_id,
                settings.azure_ad_b2c_client_id,
                settings.azure_ad_b2c_client_secret,
            )
            # Fails fast on a misconfigured app registration
            await asyncio.to_thread(credential.get_token, GRAPH_SCOPE)
            return GraphClient(
                credential,
                base_url=settings.graph_base_url,
                timeout=settings.http_timeout_seconds,
            )

        return cls(factory)

    @property
    def state(self) -> BridgeState:
        """Current lifecycle state."""
        return self._state

    async def get_client(self) -> GraphClient:
        """Get the Graph client, constructing it on first use.

        Raises:
            Exception: Whatever the factory raised; the bridge stays uninitialized
        """
        client = self._client
        if client is not None:
            return client

        async with self._lock:
            if self._client is None:
                self._state = BridgeState.INITIALIZING
                try:
                    client = self._factory()
                    if inspect.isawaitable(client):
                        client = await client
                except Exception as e:
                    self._state = BridgeState.UNINITIALIZED
                    log_warning(logger, "Graph client initialization failed", e)
                    raise
                self._client = client
                self._state = BridgeState.READY
                logger.info("Graph client initialized")
            return self._client

    async def aclose(self) -> None:
        """Release the client at process shutdown."""
        async with self._lock:
            if self._client is not None:
                await self._client.aclose()
            self._client = None
            self._state = BridgeState.UNINITIALIZED

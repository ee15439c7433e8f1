"""Identity provider (Azure AD B2C via Microsoft Graph) integration."""

from marketplace_api.providers.identity.bridge import BridgeState, IdentityBridge
from marketplace_api.providers.identity.graph_client import GRAPH_SCOPE, GraphClient

__all__ = ["BridgeState", "GRAPH_SCOPE", "GraphClient", "IdentityBridge"]

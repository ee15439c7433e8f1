"""Centralized dependency injection factories for FastAPI.

Process-wide collaborators (identity bridge, vehicle data registry) are
created in the application lifespan and stored on ``app.state``; the
factories below hand them to services per request.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_api.database import get_db
from marketplace_api.providers.identity.bridge import IdentityBridge
from marketplace_api.providers.vehicle.registry import VehicleDataRegistry
from marketplace_api.services.config_service import ConfigService
from marketplace_api.services.rbac_service import RbacService
from marketplace_api.services.security_service import SecurityService
from marketplace_api.services.vehicle_data_service import VehicleDataService

# =============================================================================
# Application State
# =============================================================================


def get_identity_bridge(request: Request) -> IdentityBridge:
    """Get the process-wide identity bridge."""
    return request.app.state.identity_bridge


def get_vehicle_data_registry(request: Request) -> VehicleDataRegistry:
    """Get the process-wide vehicle data provider registry."""
    return request.app.state.vehicle_data_registry


# =============================================================================
# Service Factories
# =============================================================================


def get_security_service(
    db: AsyncSession = Depends(get_db),
    identity_bridge: IdentityBridge = Depends(get_identity_bridge),
) -> SecurityService:
    """Get SecurityService instance."""
    return SecurityService(db, identity_bridge)


def get_rbac_service(db: AsyncSession = Depends(get_db)) -> RbacService:
    """Get RbacService instance."""
    return RbacService(db)


def get_config_service(db: AsyncSession = Depends(get_db)) -> ConfigService:
    """Get ConfigService instance."""
    return ConfigService(db)


def get_vehicle_data_service(
    registry: VehicleDataRegistry = Depends(get_vehicle_data_registry),
) -> VehicleDataService:
    """Get VehicleDataService instance."""
    return VehicleDataService(registry)

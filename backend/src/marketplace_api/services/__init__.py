"""Service layer."""

from marketplace_api.services.config_service import ConfigService
from marketplace_api.services.rbac_service import RbacService
from marketplace_api.services.security_service import SecurityService
from marketplace_api.services.seed_service import SeedService
from marketplace_api.services.vehicle_data_service import VehicleDataService

__all__ = [
    "ConfigService",
    "RbacService",
    "SecurityService",
    "SeedService",
    "VehicleDataService",
]

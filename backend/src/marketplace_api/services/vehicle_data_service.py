"""Vehicle data service delegating to the configured providers."""

import logging

from marketplace_api.exceptions import VehicleDataError
from marketplace_api.models.dto.vehicle import (
    CritAirRequest,
    CritAirResponse,
    EmissionRequest,
    EmissionResponse,
    RecallRequest,
    RecallResponse,
    VinDecodeRequest,
    VinDecodeResponse,
)
from marketplace_api.providers.vehicle.registry import VehicleDataRegistry

logger = logging.getLogger(__name__)


class VehicleDataService:
    """Entry point for vehicle data lookups.

    Each call goes to exactly one provider. Provider failures propagate
    as VehicleDataError subclasses.
    """

    def __init__(self, registry: VehicleDataRegistry) -> None:
        """Initialize service with the provider registry."""
        self.registry = registry

    async def get_emissions(self, request: EmissionRequest) -> EmissionResponse:
        """Look up emission data."""
        try:
            return await self.registry.emissions.get_emissions(request)
        except VehicleDataError as e:
            logger.warning(f"Emission lookup failed ({e.provider_name}): {e.message}")
            raise

    async def get_recalls(self, request: RecallRequest) -> RecallResponse:
        """Look up recall campaigns."""
        try:
            return await self.registry.recalls.get_recalls(request)
        except VehicleDataError as e:
            logger.warning(f"Recall lookup failed ({e.provider_name}): {e.message}")
            raise

    async def decode_vin(self, request: VinDecodeRequest) -> VinDecodeResponse:
        """Decode a VIN."""
        try:
            return await self.registry.vin_decoder.decode(request)
        except VehicleDataError as e:
            logger.warning(f"VIN decode failed ({e.provider_name}): {e.message}")
            raise

    async def classify_pollution(self, request: CritAirRequest) -> CritAirResponse:
        """Compute the Crit'Air classification."""
        return await self.registry.pollution_classifier.classify(request)

"""Vehicle data providers."""

from marketplace_api.providers.vehicle.ademe import AdemeEmissionProvider
from marketplace_api.providers.vehicle.base import (
    EmissionProvider,
    HttpVehicleDataProvider,
    PollutionClassifier,
    RecallProvider,
    VehicleDataProvider,
    VinDecoderProvider,
)
from marketplace_api.providers.vehicle.critair import LocalCritAirClassifier
from marketplace_api.providers.vehicle.mock import (
    MockCritAirClassifier,
    MockEmissionProvider,
    MockRecallProvider,
    MockVinDecoderProvider,
)
from marketplace_api.providers.vehicle.nhtsa import NhtsaVinDecoderProvider
from marketplace_api.providers.vehicle.rappelconso import RappelConsoRecallProvider
from marketplace_api.providers.vehicle.registry import VehicleDataRegistry

__all__ = [
    "AdemeEmissionProvider",
    "EmissionProvider",
    "HttpVehicleDataProvider",
    "LocalCritAirClassifier",
    "MockCritAirClassifier",
    "MockEmissionProvider",
    "MockRecallProvider",
    "MockVinDecoderProvider",
    "NhtsaVinDecoderProvider",
    "PollutionClassifier",
    "RappelConsoRecallProvider",
    "RecallProvider",
    "VehicleDataProvider",
    "VehicleDataRegistry",
    "VinDecoderProvider",
]

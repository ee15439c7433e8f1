"""Vehicle data provider registry.

Resolves the configured implementation for each capability once, at
startup. Handlers only see the abstract interfaces.
"""

import logging

import httpx

from marketplace_api.config import Settings
from marketplace_api.providers.vehicle.ademe import AdemeEmissionProvider
from marketplace_api.providers.vehicle.base import (
    EmissionProvider,
    PollutionClassifier,
    RecallProvider,
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

logger = logging.getLogger(__name__)


def _select(kind: str, key: str, available: dict):
    factory = available.get(key)
    if factory is None:
        raise ValueError(f"Unknown {kind} provider: {key}")
    return factory


class VehicleDataRegistry:
    """Holds one provider per vehicle data capability."""

    def __init__(
        self,
        emissions: EmissionProvider,
        recalls: RecallProvider,
        vin_decoder: VinDecoderProvider,
        pollution_classifier: PollutionClassifier,
    ) -> None:
        self.emissions = emissions
        self.recalls = recalls
        self.vin_decoder = vin_decoder
        self.pollution_classifier = pollution_classifier

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> "VehicleDataRegistry":
        """Build the registry from configured provider keys.

        Args:
            settings: Application settings
            http_client: Shared HTTP client used by remote providers

        Returns:
            Registry with every capability resolved

        Raises:
            ValueError: If a configured provider key is unknown
        """
        emission_providers = {
            "ademe": lambda: AdemeEmissionProvider(http_client, settings.ademe_base_url),
            "mock": MockEmissionProvider,
        }
        recall_providers = {
            "rappelconso": lambda: RappelConsoRecallProvider(
                http_client, settings.rappelconso_base_url
            ),
            "mock": MockRecallProvider,
        }
        vin_decoders = {
            "nhtsa": lambda: NhtsaVinDecoderProvider(http_client, settings.nhtsa_base_url),
            "mock": MockVinDecoderProvider,
        }
        pollution_classifiers = {
            "local-critair": LocalCritAirClassifier,
            "mock": MockCritAirClassifier,
        }

        registry = cls(
            emissions=_select("emission", settings.emission_provider, emission_providers)(),
            recalls=_select("recall", settings.recall_provider, recall_providers)(),
            vin_decoder=_select("VIN decoder", settings.vin_decoder_provider, vin_decoders)(),
            pollution_classifier=_select(
                "pollution classifier",
                settings.pollution_classifier_provider,
                pollution_classifiers,
            )(),
        )
        logger.info(
            "Vehicle data providers: "
            f"emissions={registry.emissions.provider_name}, "
            f"recalls={registry.recalls.provider_name}, "
            f"vin={registry.vin_decoder.provider_name}, "
            f"critair={registry.pollution_classifier.provider_name}"
        )
        return registry

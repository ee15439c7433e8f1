"""Vehicle data provider interfaces.

Each capability has its own abstract interface; every concrete provider is a
named implementation tagging its results with a ``ProviderInfo``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from marketplace_api.exceptions import DecodeFailure, FetchFailure
from marketplace_api.models.dto.vehicle import (
    CritAirRequest,
    CritAirResponse,
    EmissionRequest,
    EmissionResponse,
    ProviderInfo,
    RecallRequest,
    RecallResponse,
    VinDecodeRequest,
    VinDecodeResponse,
)

logger = logging.getLogger(__name__)


class VehicleDataProvider(ABC):
    """Common provider metadata."""

    provider_name: str
    provider_version: str = "1.0.0"

    @property
    def provider_info(self) -> ProviderInfo:
        """Provider tag attached to every result."""
        return ProviderInfo(
            provider_name=self.provider_name,
            provider_version=self.provider_version,
        )


class HttpVehicleDataProvider(VehicleDataProvider):
    """Provider backed by a JSON REST API.

    One request per call. Transport errors and non-2xx statuses raise
    FetchFailure, non-JSON bodies raise DecodeFailure.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        """Initialize provider.

        Args:
            http_client: Shared HTTP client (owned by the application)
            base_url: API base URL
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self.http_client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"{self.provider_name} request failed: {type(e).__name__}")
            raise FetchFailure(
                self.provider_name, f"{self.provider_name} API request failed"
            ) from e

        if response.is_error:
            raise FetchFailure(
                self.provider_name,
                f"{self.provider_name} API error: {response.status_code} {response.reason_phrase}",
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeFailure(
                self.provider_name, f"{self.provider_name} API returned invalid JSON"
            ) from e


class EmissionProvider(VehicleDataProvider):
    """Vehicle CO2 and pollutant emissions."""

    @abstractmethod
    async def get_emissions(self, request: EmissionRequest) -> EmissionResponse:
        """Look up emission data for a vehicle."""


class RecallProvider(VehicleDataProvider):
    """Manufacturer recall campaigns."""

    @abstractmethod
    async def get_recalls(self, request: RecallRequest) -> RecallResponse:
        """Look up recall campaigns for a make/model."""


class VinDecoderProvider(VehicleDataProvider):
    """VIN technical decoding."""

    @abstractmethod
    async def decode(self, request: VinDecodeRequest) -> VinDecodeResponse:
        """Decode a VIN into technical vehicle data."""


class PollutionClassifier(VehicleDataProvider):
    """Pollution class (Crit'Air) computation."""

    @abstractmethod
    async def classify(self, request: CritAirRequest) -> CritAirResponse:
        """Compute the pollution class of a vehicle."""

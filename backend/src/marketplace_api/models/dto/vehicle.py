"""Vehicle data DTOs shared by all vehicle data providers."""

from datetime import date
from typing import Literal

from pydantic import Field

from marketplace_api.models.dto.base import CamelModel

CritAirLevel = Literal["0", "1", "2", "3", "4", "5", "non-classe"]


class ProviderInfo(CamelModel):
    """Identifies the backend that produced a result."""

    provider_name: str
    provider_version: str


class EmissionRequest(CamelModel):
    """Emission lookup request."""

    make: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    year: int | None = Field(default=None, ge=1900, le=2100)
    fuel_type: str | None = Field(default=None, max_length=50)


class EmissionResponse(CamelModel):
    """Normalized emission data."""

    co2_g_km: float
    euro_norm: str
    energy_class: str
    fuel_type: str
    pollutants: dict[str, float] | None = None
    provider: ProviderInfo


class RecallRequest(CamelModel):
    """Recall lookup request."""

    make: str = Field(min_length=1, max_length=100)
    model: str | None = Field(default=None, max_length=100)


class RecallCampaign(CamelModel):
    """A single recall campaign."""

    id: str
    title: str
    description: str
    published_date: str
    risk_level: str
    manufacturer: str
    affected_models: list[str] = Field(default_factory=list)


class RecallResponse(CamelModel):
    """Normalized recall data."""

    recalls: list[RecallCampaign]
    total_count: int
    provider: ProviderInfo


class VinDecodeRequest(CamelModel):
    """VIN decode request."""

    vin: str = Field(min_length=11, max_length=17, pattern=r"^[A-HJ-NPR-Za-hj-npr-z0-9]+$")


class VinDecodeResponse(CamelModel):
    """Normalized VIN technical data."""

    vin: str
    make: str
    model: str
    year: int
    body_class: str | None = None
    drive_type: str | None = None
    engine_cylinders: int | None = None
    engine_capacity_cc: int | None = None
    fuel_type: str | None = None
    gvwr: str | None = None
    plant_country: str | None = None
    manufacturer: str
    vehicle_type: str | None = None
    provider: ProviderInfo


class CritAirRequest(CamelModel):
    """Pollution classification request."""

    fuel_type: str = Field(max_length=50)
    euro_norm: str = Field(default="", max_length=50)
    registration_date: date


class CritAirResponse(CamelModel):
    """Pollution classification (Crit'Air sticker)."""

    level: CritAirLevel
    label: str
    color: str
    provider: ProviderInfo

"""In-memory vehicle data providers.

Fixed fixtures for local development and demos, selected with the ``mock``
registry key. No network call is made.
"""

from marketplace_api.exceptions import FetchFailure
from marketplace_api.models.dto.vehicle import (
    CritAirLevel,
    CritAirRequest,
    CritAirResponse,
    EmissionRequest,
    EmissionResponse,
    RecallCampaign,
    RecallRequest,
    RecallResponse,
    VinDecodeRequest,
    VinDecodeResponse,
)
from marketplace_api.providers.vehicle.base import (
    EmissionProvider,
    PollutionClassifier,
    RecallProvider,
    VinDecoderProvider,
)
from marketplace_api.providers.vehicle.critair import (
    CRITAIR_LABELS,
    FuelCategory,
    normalize_fuel_type,
    parse_euro_norm,
)

MOCK_EMISSIONS: dict[tuple[str, str, int, str], dict] = {
    ("Renault", "Clio V", 2022, "essence"): {
        "co2_g_km": 128,
        "energy_class": "B",
        "euro_norm": "Euro 6d",
        "fuel_type": "essence",
        "pollutants": {"NOx": 0.04, "CO": 0.5, "HC": 0.05},
    },
    ("Peugeot", "308", 2023, "diesel"): {
        "co2_g_km": 102,
        "energy_class": "A",
        "euro_norm": "Euro 6d-FULL",
        "fuel_type": "diesel",
        "pollutants": {"NOx": 0.06, "PM": 0.004, "CO": 0.3},
    },
    ("Volkswagen", "Golf 8", 2021, "essence"): {
        "co2_g_km": 132,
        "energy_class": "B",
        "euro_norm": "Euro 6d",
        "fuel_type": "essence",
        "pollutants": {"NOx": 0.04, "CO": 0.6},
    },
    ("BMW", "Série 3", 2020, "diesel"): {
        "co2_g_km": 118,
        "energy_class": "A",
        "euro_norm": "Euro 6d-TEMP",
        "fuel_type": "diesel",
        "pollutants": {"NOx": 0.08, "PM": 0.005, "CO": 0.4},
    },
}

MOCK_RECALLS: dict[tuple[str, str], list[dict]] = {
    ("Citroën", "C3"): [
        {
            "id": "RC-2024-001",
            "title": "Airbag conducteur défectueux",
            "description": "Risque de non-déploiement de l'airbag en cas de choc frontal",
            "published_date": "2024-01-15",
            "risk_level": "high",
            "manufacturer": "Citroën",
            "affected_models": ["C3 2017-2020"],
        },
    ],
    ("Renault", "Clio V"): [],
    ("Peugeot", "308"): [
        {
            "id": "RC-2023-042",
            "title": "Ceinture de sécurité arrière",
            "description": "Fixation insuffisante de la ceinture centrale arrière",
            "published_date": "2023-09-20",
            "risk_level": "medium",
            "manufacturer": "Peugeot",
            "affected_models": ["308 2021-2022"],
        },
        {
            "id": "RC-2024-018",
            "title": "Fuite circuit de refroidissement",
            "description": "Risque de fuite de liquide de refroidissement sur moteur 1.5 BlueHDi",
            "published_date": "2024-03-01",
            "risk_level": "low",
            "manufacturer": "Peugeot",
            "affected_models": ["308 2022-2023"],
        },
    ],
}

MOCK_VINS: dict[str, dict] = {
    "VF1RFB00X56789012": {
        "make": "Renault",
        "model": "Clio",
        "year": 2022,
        "body_class": "Hatchback",
        "drive_type": "FWD",
        "engine_cylinders": 4,
        "engine_capacity_cc": 1333,
        "fuel_type": "Gasoline",
        "plant_country": "France",
        "manufacturer": "Renault SAS",
        "vehicle_type": "Passenger Car",
    },
    "VF3LCBHZ6JS123456": {
        "make": "Peugeot",
        "model": "308",
        "year": 2023,
        "body_class": "Hatchback",
        "drive_type": "FWD",
        "engine_cylinders": 4,
        "engine_capacity_cc": 1499,
        "fuel_type": "Diesel",
        "plant_country": "France",
        "manufacturer": "Automobiles Peugeot",
        "vehicle_type": "Passenger Car",
    },
    "WVWZZZ3CZWE123456": {
        "make": "Volkswagen",
        "model": "Golf",
        "year": 2021,
        "body_class": "Hatchback",
        "drive_type": "FWD",
        "engine_cylinders": 4,
        "engine_capacity_cc": 1498,
        "fuel_type": "Gasoline",
        "plant_country": "Germany",
        "manufacturer": "Volkswagen AG",
        "vehicle_type": "Passenger Car",
    },
    "WBA11AA010CH12345": {
        "make": "BMW",
        "model": "3 Series",
        "year": 2020,
        "body_class": "Sedan",
        "drive_type": "RWD",
        "engine_cylinders": 4,
        "engine_capacity_cc": 1995,
        "fuel_type": "Diesel",
        "plant_country": "Germany",
        "manufacturer": "BMW AG",
        "vehicle_type": "Passenger Car",
    },
}


class MockEmissionProvider(EmissionProvider):
    """Emission fixtures; unknown vehicles get a generic Euro 6 profile."""

    provider_name = "mock"

    async def get_emissions(self, request: EmissionRequest) -> EmissionResponse:
        """Look up emission data for a vehicle."""
        key = (request.make, request.model, request.year, request.fuel_type)
        data = MOCK_EMISSIONS.get(key)
        if data is None:
            data = {
                "co2_g_km": 120,
                "energy_class": "B",
                "euro_norm": "Euro 6",
                "fuel_type": request.fuel_type or "essence",
                "pollutants": None,
            }
        return EmissionResponse(**data, provider=self.provider_info)


class MockRecallProvider(RecallProvider):
    """Recall fixtures keyed by make and model."""

    provider_name = "mock"

    async def get_recalls(self, request: RecallRequest) -> RecallResponse:
        """Look up recall campaigns for a make/model."""
        campaigns = [
            RecallCampaign(**campaign)
            for campaign in MOCK_RECALLS.get((request.make, request.model or ""), [])
        ]
        return RecallResponse(
            recalls=campaigns,
            total_count=len(campaigns),
            provider=self.provider_info,
        )


class MockVinDecoderProvider(VinDecoderProvider):
    """VIN fixtures; any other VIN is reported as not found."""

    provider_name = "mock"

    async def decode(self, request: VinDecodeRequest) -> VinDecodeResponse:
        """Decode a VIN into technical vehicle data.

        Raises:
            FetchFailure: If the VIN has no fixture
        """
        vin = request.vin.upper()
        data = MOCK_VINS.get(vin)
        if data is None:
            raise FetchFailure(self.provider_name, f"VIN not found: {vin}")
        return VinDecodeResponse(vin=vin, **data, provider=self.provider_info)


def _classify_by_norm(fuel: FuelCategory, euro: int | None) -> tuple[CritAirLevel, str]:
    if fuel == FuelCategory.ELECTRIC:
        return "0", "vert"
    if euro is None:
        return "non-classe", "gris"
    if fuel == FuelCategory.PETROL:
        if euro >= 5:
            return "1", "violet"
        if euro == 4:
            return "2", "jaune"
        if euro in (2, 3):
            return "3", "orange"
    if fuel == FuelCategory.DIESEL:
        if euro >= 6:
            return "2", "jaune"
        if euro in (4, 5):
            return "3", "orange"
        if euro == 3:
            return "4", "bordeaux"
        if euro == 2:
            return "5", "gris"
    return "non-classe", "gris"


class MockCritAirClassifier(PollutionClassifier):
    """Crit'Air from fuel and Euro norm only, ignoring the registration date."""

    provider_name = "mock"

    async def classify(self, request: CritAirRequest) -> CritAirResponse:
        """Compute the pollution class of a vehicle."""
        level, color = _classify_by_norm(
            normalize_fuel_type(request.fuel_type), parse_euro_norm(request.euro_norm)
        )
        return CritAirResponse(
            level=level,
            label=CRITAIR_LABELS[level],
            color=color,
            provider=self.provider_info,
        )

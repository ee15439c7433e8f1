"""Local Crit'Air calculator.

Implements the French pollution sticker rules (Arrêté du 21 juin 2016) from
fuel type, Euro norm and registration date. No network call is made.
"""

import re
from enum import StrEnum

from marketplace_api.models.dto.vehicle import CritAirLevel, CritAirRequest, CritAirResponse
from marketplace_api.providers.vehicle.base import PollutionClassifier

CRITAIR_LABELS: dict[str, str] = {
    "0": "Crit'Air 0 - Zéro émission",
    "1": "Crit'Air 1",
    "2": "Crit'Air 2",
    "3": "Crit'Air 3",
    "4": "Crit'Air 4",
    "5": "Crit'Air 5",
    "non-classe": "Non classé",
}

ELECTRIC_FUELS = {"electrique", "electric", "hydrogene", "hydrogen"}
PETROL_FUELS = {"essence", "gasoline", "petrol", "gpl", "gnv", "e85"}
DIESEL_FUELS = {"diesel", "gazole"}

EURO_NORM_PATTERN = re.compile(r"(\d+)")


class FuelCategory(StrEnum):
    """Fuel families relevant to Crit'Air classification."""

    ELECTRIC = "electric"
    PETROL = "essence"
    DIESEL = "diesel"
    UNKNOWN = "unknown"


def normalize_fuel_type(fuel_type: str) -> FuelCategory:
    """Map a free-form fuel name to its Crit'Air family."""
    value = fuel_type.strip().lower()
    if value in ELECTRIC_FUELS:
        return FuelCategory.ELECTRIC
    if value in PETROL_FUELS:
        return FuelCategory.PETROL
    if value in DIESEL_FUELS:
        return FuelCategory.DIESEL
    return FuelCategory.UNKNOWN


def parse_euro_norm(euro_norm: str) -> int | None:
    """Extract the Euro norm number ("Euro 6d-TEMP" -> 6)."""
    match = EURO_NORM_PATTERN.search(euro_norm or "")
    if not match:
        return None
    return int(match.group(1))


def _classify_petrol(euro: int | None, year: int) -> tuple[CritAirLevel, str]:
    if euro is not None:
        if euro >= 5:
            return "1", "violet"
        if euro == 4:
            return "2", "jaune"
        if euro in (2, 3):
            return "3", "orange"
    if year >= 2011:
        return "1", "violet"
    if year >= 2006:
        return "2", "jaune"
    if year >= 1997:
        return "3", "orange"
    return "non-classe", "gris"


def _classify_diesel(euro: int | None, year: int) -> tuple[CritAirLevel, str]:
    if euro is not None:
        if euro >= 6:
            return "2", "jaune"
        if euro in (4, 5):
            return "3", "orange"
        if euro == 3:
            return "4", "bordeaux"
        if euro == 2:
            return "5", "gris"
    if year >= 2011:
        return "2", "jaune"
    if year >= 2006:
        return "3", "orange"
    if year >= 2001:
        return "4", "bordeaux"
    if year >= 1997:
        return "5", "gris"
    return "non-classe", "gris"


def classify_vehicle(fuel: FuelCategory, euro: int | None, year: int) -> tuple[CritAirLevel, str]:
    """Compute the (level, color) pair.

    The Euro norm takes precedence; the registration year is only used when
    the norm is missing or too old to map directly.
    """
    if fuel == FuelCategory.ELECTRIC:
        return "0", "vert"
    if fuel == FuelCategory.PETROL:
        return _classify_petrol(euro, year)
    if fuel == FuelCategory.DIESEL:
        return _classify_diesel(euro, year)
    return "non-classe", "gris"


class LocalCritAirClassifier(PollutionClassifier):
    """Crit'Air computed locally from regulatory rules."""

    provider_name = "local-critair"
    provider_version = "1.0.0"

    async def classify(self, request: CritAirRequest) -> CritAirResponse:
        """Compute the Crit'Air sticker for a vehicle."""
        level, color = classify_vehicle(
            normalize_fuel_type(request.fuel_type),
            parse_euro_norm(request.euro_norm),
            request.registration_date.year,
        )
        return CritAirResponse(
            level=level,
            label=CRITAIR_LABELS[level],
            color=color,
            provider=self.provider_info,
        )

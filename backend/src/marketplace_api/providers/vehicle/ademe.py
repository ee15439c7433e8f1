"""ADEME car labelling dataset (emissions) provider."""

from typing import Any

import httpx

from marketplace_api.exceptions import DecodeFailure, FetchFailure
from marketplace_api.models.dto.vehicle import EmissionRequest, EmissionResponse
from marketplace_api.providers.vehicle.base import EmissionProvider, HttpVehicleDataProvider

ADEME_BASE_URL = "https://data.ademe.fr/data-fair/api/v1/datasets/ademe-car-labelling"

SELECTED_FIELDS = "co2_g_km,lib_eg_conso,norme_euro,cod_cbr,co_typ_1,nox_typ_1,ptcl_typ_1"

# Marketplace fuel names -> ADEME fuel codes
FUEL_CODES = {
    "essence": "ES",
    "diesel": "GO",
    "gazole": "GO",
    "electrique": "EL",
    "hybride": "EH",
    "gpl": "GP",
    "gnv": "GN",
}

FUEL_NAMES = {
    "ES": "essence",
    "GO": "diesel",
    "EL": "electrique",
    "EH": "hybride",
    "GP": "gpl",
    "GN": "gnv",
}

POLLUTANT_FIELDS = {
    "co_typ_1": "CO",
    "nox_typ_1": "NOx",
    "ptcl_typ_1": "PM",
}


def map_fuel_type(fuel_type: str) -> str:
    """Map a marketplace fuel name to the ADEME code (unknown names pass through)."""
    return FUEL_CODES.get(fuel_type.lower(), fuel_type)


def unmap_fuel_type(code: str | None) -> str:
    """Map an ADEME fuel code back to a marketplace fuel name."""
    return FUEL_NAMES.get(code or "", code or "unknown")


def build_pollutants(record: dict[str, Any]) -> dict[str, float] | None:
    """Collect the pollutant measures present in a record, or None."""
    pollutants = {
        label: record[field]
        for field, label in POLLUTANT_FIELDS.items()
        if record.get(field) is not None
    }
    return pollutants or None


class AdemeEmissionProvider(HttpVehicleDataProvider, EmissionProvider):
    """ADEME (French environment agency) emission data."""

    provider_name = "ademe"
    provider_version = "1.0.0"

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = ADEME_BASE_URL) -> None:
        super().__init__(http_client, base_url)

    def _build_params(self, request: EmissionRequest) -> dict[str, str]:
        params: dict[str, str] = {}
        if request.make:
            params["lib_mrq_utf8_eq"] = request.make.upper()
        if request.model:
            params["lib_mod_utf8_eq"] = request.model.upper()
        if request.year:
            params["annee_eq"] = str(request.year)
        if request.fuel_type:
            params["cod_cbr_eq"] = map_fuel_type(request.fuel_type)
        params["size"] = "1"
        params["select"] = SELECTED_FIELDS
        return params

    async def get_emissions(self, request: EmissionRequest) -> EmissionResponse:
        """Look up emission data for a vehicle.

        Raises:
            FetchFailure: If the request fails or no record matches
            DecodeFailure: If the payload has an unexpected shape
        """
        data = await self._get_json(f"{self.base_url}/lines", self._build_params(request))

        if not isinstance(data, dict):
            raise DecodeFailure(self.provider_name, "Unexpected ADEME response shape")

        results = data.get("results") or []
        if not results:
            raise FetchFailure(
                self.provider_name,
                f"No emission data found for {request.make} {request.model} {request.year}",
            )

        record = results[0]
        try:
            return EmissionResponse(
                co2_g_km=record.get("co2_g_km") or 0,
                energy_class=record.get("lib_eg_conso") or "unknown",
                euro_norm=record.get("norme_euro") or "unknown",
                fuel_type=request.fuel_type or unmap_fuel_type(record.get("cod_cbr")),
                pollutants=build_pollutants(record),
                provider=self.provider_info,
            )
        except (AttributeError, ValueError) as e:
            raise DecodeFailure(self.provider_name, "Unexpected ADEME record shape") from e

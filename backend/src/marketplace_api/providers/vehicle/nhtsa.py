"""NHTSA vPIC VIN decoder provider."""

from typing import Any
from urllib.parse import quote

import httpx

from marketplace_api.exceptions import DecodeFailure
from marketplace_api.models.dto.vehicle import VinDecodeRequest, VinDecodeResponse
from marketplace_api.providers.vehicle.base import HttpVehicleDataProvider, VinDecoderProvider

NHTSA_BASE_URL = "https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVinValues"


def _text(value: Any) -> str | None:
    """Normalize vPIC empty strings to None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _int(value: Any) -> int | None:
    text = _text(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _displacement_cc(value: Any) -> int | None:
    text = _text(value)
    if text is None:
        return None
    try:
        return round(float(text))
    except ValueError:
        return None


def is_error_code(code: Any) -> bool:
    """vPIC reports success as ErrorCode "0" or a comma-separated list containing "0"."""
    text = _text(code)
    if text is None:
        return False
    return "0" not in {part.strip() for part in text.split(",")}


class NhtsaVinDecoderProvider(HttpVehicleDataProvider, VinDecoderProvider):
    """NHTSA vPIC VIN decoding."""

    provider_name = "nhtsa"
    provider_version = "1.0.0"

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = NHTSA_BASE_URL) -> None:
        super().__init__(http_client, base_url)

    async def decode(self, request: VinDecodeRequest) -> VinDecodeResponse:
        """Decode a VIN.

        Raises:
            FetchFailure: If the request fails
            DecodeFailure: If vPIC returns no result, reports a decode error
                or the payload is malformed
        """
        vin = request.vin
        data = await self._get_json(f"{self.base_url}/{quote(vin)}", {"format": "json"})

        if not isinstance(data, dict):
            raise DecodeFailure(self.provider_name, "Unexpected NHTSA response shape")

        results = data.get("Results") or []
        if not results:
            raise DecodeFailure(self.provider_name, f"No data returned for VIN {vin}")

        record = results[0]
        if not isinstance(record, dict):
            raise DecodeFailure(self.provider_name, "Unexpected NHTSA record shape")

        if is_error_code(record.get("ErrorCode")):
            raise DecodeFailure(
                self.provider_name,
                f"VIN decode error: {_text(record.get('ErrorText')) or 'unknown error'}",
            )

        return VinDecodeResponse(
            vin=vin,
            make=_text(record.get("Make")) or "Unknown",
            model=_text(record.get("Model")) or "Unknown",
            year=_int(record.get("ModelYear")) or 0,
            body_class=_text(record.get("BodyClass")),
            drive_type=_text(record.get("DriveType")),
            engine_cylinders=_int(record.get("EngineCylinders")),
            engine_capacity_cc=_displacement_cc(record.get("DisplacementCC")),
            fuel_type=_text(record.get("FuelTypePrimary")),
            gvwr=_text(record.get("GVWR")),
            plant_country=_text(record.get("PlantCountry")),
            manufacturer=_text(record.get("Manufacturer")) or "Unknown",
            vehicle_type=_text(record.get("VehicleType")),
            provider=self.provider_info,
        )

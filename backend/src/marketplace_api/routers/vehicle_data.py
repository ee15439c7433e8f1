"""Vehicle data router (emissions, recalls, VIN decoding, Crit'Air)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from marketplace_api.dependencies import get_vehicle_data_service
from marketplace_api.models.domain.caller import CallerContext
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
from marketplace_api.security.auth import get_current_caller
from marketplace_api.services.vehicle_data_service import VehicleDataService

router = APIRouter()


@router.post("/emissions", response_model=EmissionResponse)
async def get_emissions(
    request: EmissionRequest,
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[VehicleDataService, Depends(get_vehicle_data_service)],
) -> EmissionResponse:
    """Get CO2 and pollutant emissions for a vehicle."""
    return await service.get_emissions(request)


@router.post("/recalls", response_model=RecallResponse)
async def get_recalls(
    request: RecallRequest,
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[VehicleDataService, Depends(get_vehicle_data_service)],
) -> RecallResponse:
    """Get manufacturer recall campaigns for a make and model."""
    return await service.get_recalls(request)


@router.post("/vin", response_model=VinDecodeResponse)
async def decode_vin(
    request: VinDecodeRequest,
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[VehicleDataService, Depends(get_vehicle_data_service)],
) -> VinDecodeResponse:
    """Decode a VIN into technical vehicle data."""
    return await service.decode_vin(request)


@router.post("/critair", response_model=CritAirResponse)
async def get_critair(
    request: CritAirRequest,
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[VehicleDataService, Depends(get_vehicle_data_service)],
) -> CritAirResponse:
    """Compute the Crit'Air pollution sticker for a vehicle."""
    return await service.classify_pollution(request)

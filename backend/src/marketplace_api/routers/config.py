"""Runtime configuration router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from marketplace_api.dependencies import get_config_service
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.dto.config import ConfigFeatureResponse, ConfigParameterResponse
from marketplace_api.security.auth import get_current_caller
from marketplace_api.services.config_service import ConfigService

router = APIRouter()


@router.get("/session-parameters", response_model=list[ConfigParameterResponse])
async def get_session_parameters(
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[ConfigService, Depends(get_config_service)],
) -> list[ConfigParameterResponse]:
    """Get session timeout parameters for the client."""
    return await service.get_session_parameters()


@router.get("/features", response_model=list[ConfigFeatureResponse])
async def list_features(
    caller: Annotated[CallerContext, Depends(get_current_caller)],
    service: Annotated[ConfigService, Depends(get_config_service)],
) -> list[ConfigFeatureResponse]:
    """List active feature flags."""
    return await service.list_active_features()

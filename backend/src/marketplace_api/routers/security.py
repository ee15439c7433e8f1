"""Account security router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from marketplace_api.dependencies import get_security_service
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.dto.security import ToggleMfaRequest, ToggleMfaResponse
from marketplace_api.security.auth import get_optional_caller
from marketplace_api.services.security_service import SecurityService

router = APIRouter()


@router.post("/toggle-2fa", response_model=ToggleMfaResponse)
async def toggle_two_factor(
    request: ToggleMfaRequest,
    caller: Annotated[CallerContext | None, Depends(get_optional_caller)],
    service: Annotated[SecurityService, Depends(get_security_service)],
) -> ToggleMfaResponse:
    """Enable or disable two-factor authentication for the caller.

    Only seller accounts with a linked Azure AD B2C identity may change
    their MFA requirement.
    """
    return await service.toggle_mfa(caller, request.enable)

"""Account security DTOs."""

from typing import Literal

from marketplace_api.models.dto.base import CamelModel

MfaStatus = Literal["enabled", "disabled"]


class ToggleMfaRequest(CamelModel):
    """Toggle MFA request."""

    enable: bool


class ToggleMfaResponse(CamelModel):
    """Toggle MFA response, mirroring the requested state."""

    success: bool
    mfa_status: MfaStatus

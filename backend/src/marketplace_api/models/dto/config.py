"""Configuration DTOs."""

from marketplace_api.models.dto.base import CamelModel


class ConfigParameterResponse(CamelModel):
    """Configuration parameter response."""

    key: str
    value: str
    description: str | None = None


class ConfigFeatureResponse(CamelModel):
    """Feature flag response."""

    code: str
    name: str
    requires_auth: bool
    required_role: str | None = None
    is_active: bool

"""Domain models package."""

from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode

__all__ = ["CallerContext", "RoleCode"]

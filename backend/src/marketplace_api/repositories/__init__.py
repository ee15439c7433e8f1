"""Repository layer package."""

from marketplace_api.repositories.config_repository import ConfigRepository
from marketplace_api.repositories.permission_repository import PermissionRepository
from marketplace_api.repositories.role_repository import RoleRepository
from marketplace_api.repositories.user_repository import UserRepository

__all__ = [
    "ConfigRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]

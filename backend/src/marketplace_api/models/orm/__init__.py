"""SQLAlchemy ORM models package."""

from marketplace_api.models.orm.base import Base
from marketplace_api.models.orm.config import ConfigFeatureORM, ConfigParameterORM
from marketplace_api.models.orm.permission import PermissionORM
from marketplace_api.models.orm.role import RoleORM
from marketplace_api.models.orm.role_permission import RolePermissionORM
from marketplace_api.models.orm.user import UserORM
from marketplace_api.models.orm.user_role import UserRoleORM

__all__ = [
    "Base",
    "ConfigFeatureORM",
    "ConfigParameterORM",
    "PermissionORM",
    "RoleORM",
    "RolePermissionORM",
    "UserORM",
    "UserRoleORM",
]

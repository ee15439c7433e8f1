"""User ORM model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class UserORM(Base, UUIDMixin, TimestampMixin):
    """Marketplace user database model.

    Accounts are provisioned in Azure AD B2C; ``azure_ad_b2c_id`` holds the
    provider-side object id and is read-only for this service.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    azure_ad_b2c_id: Mapped[str | None] = mapped_column(
        String(255), unique=True, nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    roles: Mapped[list["RoleORM"]] = relationship(
        "RoleORM",
        secondary="user_roles",
        primaryjoin="UserORM.id == user_roles.c.user_id",
        secondaryjoin="RoleORM.id == user_roles.c.role_id",
        viewonly=True,
    )

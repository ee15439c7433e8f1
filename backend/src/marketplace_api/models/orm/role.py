"""Role ORM model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class RoleORM(Base, UUIDMixin, TimestampMixin):
    """Role database model."""

    __tablename__ = "roles"

    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Ordinal position in the role hierarchy (visitor=0 ... administrator=5)
    level: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

    # Relationships
    permissions: Mapped[list["PermissionORM"]] = relationship(
        "PermissionORM",
        secondary="role_permissions",
        viewonly=True,
    )

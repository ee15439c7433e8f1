"""Configuration ORM models (feature flags and key/value parameters)."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class ConfigFeatureORM(Base, UUIDMixin, TimestampMixin):
    """Feature flag database model."""

    __tablename__ = "config_features"

    code: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    requires_auth: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    required_role: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class ConfigParameterORM(Base, UUIDMixin, TimestampMixin):
    """Key/value configuration parameter database model."""

    __tablename__ = "config_parameters"

    key: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)

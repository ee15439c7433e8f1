"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Marketplace API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default for security)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    db_pool_size: int = 5
    db_pool_max_overflow: int = 10
    db_pool_recycle_seconds: int = 1800

    # Security - JWT. Azure AD B2C user flows sign with RS256 keys published
    # at the flow's JWKS endpoint; HS* algorithms with a shared secret are
    # for local development and tests.
    jwt_algorithm: str = "RS256"
    jwt_secret: str | None = Field(default=None, min_length=32)
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    jwt_jwks_url: str | None = None
    jwks_cache_seconds: int = 3600

    # Azure AD B2C / Microsoft Graph
    azure_ad_b2c_tenant_id: str = ""
    azure_ad_b2c_client_id: str = ""
    azure_ad_b2c_client_secret: str = ""
    azure_ad_b2c_tenant_name: str = ""
    azure_ad_b2c_signin_policy: str = "B2C_1_signupsignin"
    graph_base_url: str = "https://graph.microsoft.com/v1.0"

    # Outbound HTTP
    http_timeout_seconds: float = 10.0

    # Vehicle data providers (registry keys)
    emission_provider: str = "ademe"
    recall_provider: str = "rappelconso"
    vin_decoder_provider: str = "nhtsa"
    pollution_classifier_provider: str = "local-critair"

    ademe_base_url: str = (
        "https://data.ademe.fr/data-fair/api/v1/datasets/ademe-car-labelling"
    )
    rappelconso_base_url: str = (
        "https://data.economie.gouv.fr/api/explore/v2.1/catalog/datasets/rappelconso0/records"
    )
    nhtsa_base_url: str = "https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVinValues"

    # Config projection exposed to authenticated callers
    session_config_namespace: str = "session."

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        # Security: Prevent debug mode in production
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        if self.uses_shared_secret and not self.jwt_secret:
            raise ValueError(
                f"JWT_SECRET must be set when JWT_ALGORITHM is {self.jwt_algorithm}"
            )
        if not self.uses_shared_secret and not self.jwks_url:
            raise ValueError(
                "AZURE_AD_B2C_TENANT_NAME or JWT_JWKS_URL must be set when "
                f"JWT_ALGORITHM is {self.jwt_algorithm}"
            )

        url = str(self.database_url)
        if not url.startswith(("postgresql://", "postgres://", "postgresql+asyncpg://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        if self.environment == "production":
            if self.uses_shared_secret:
                raise ValueError(
                    "Shared-secret JWT algorithms are not allowed in production; "
                    "tokens must be verified against the Azure AD B2C signing keys"
                )
            if not (
                self.azure_ad_b2c_tenant_id
                and self.azure_ad_b2c_client_id
                and self.azure_ad_b2c_client_secret
            ):
                raise ValueError(
                    "AZURE_AD_B2C_TENANT_ID, AZURE_AD_B2C_CLIENT_ID and "
                    "AZURE_AD_B2C_CLIENT_SECRET must be set in production"
                )

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility.
        """
        url = str(self.database_url)
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        if not url.startswith("postgresql+asyncpg://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def uses_shared_secret(self) -> bool:
        """Whether tokens are verified with the shared secret (HS* algorithms)."""
        return self.jwt_algorithm.upper().startswith("HS")

    @property
    def jwks_url(self) -> str | None:
        """JWKS endpoint of the sign-in user flow."""
        if self.jwt_jwks_url:
            return self.jwt_jwks_url
        if not self.azure_ad_b2c_tenant_name:
            return None
        tenant = self.azure_ad_b2c_tenant_name
        return (
            f"https://{tenant}.b2clogin.com/{tenant}.onmicrosoft.com/"
            f"{self.azure_ad_b2c_signin_policy}/discovery/v2.0/keys"
        )

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

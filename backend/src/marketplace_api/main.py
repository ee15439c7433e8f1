"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from marketplace_api import __version__
from marketplace_api.config import get_settings
from marketplace_api.exceptions import MarketplaceAPIError
from marketplace_api.middleware.error_handler import (
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from marketplace_api.providers.identity.bridge import IdentityBridge
from marketplace_api.providers.vehicle.registry import VehicleDataRegistry
from marketplace_api.routers import config, rbac, security, vehicle_data

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        response.headers.setdefault("Vary", "Accept, Authorization, Origin")
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Builds the process-wide collaborators and closes them at shutdown.
    """
    settings = get_settings()

    vehicle_http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    identity_bridge: IdentityBridge | None = None
    try:
        app.state.vehicle_data_registry = VehicleDataRegistry.from_settings(
            settings, vehicle_http_client
        )
        identity_bridge = IdentityBridge.from_settings(settings)
        app.state.identity_bridge = identity_bridge

        yield
    finally:
        if identity_bridge is not None:
            await identity_bridge.aclose()
        await vehicle_http_client.aclose()
        logger.info("Outbound HTTP clients closed")


def _get_allowed_origins() -> list[str]:
    """Validate configured CORS origins.

    Raises:
        ValueError: If a wildcard origin is configured
    """
    allowed_origins = []
    for origin in get_settings().cors_origins_list:
        # Wildcards are incompatible with allow_credentials=True
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        if origin.startswith(("http://", "https://")):
            allowed_origins.append(origin)
    return allowed_origins


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Vehicle Marketplace API",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Sanitized error handlers to prevent information disclosure
    app.add_exception_handler(MarketplaceAPIError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Middleware runs in reverse order of addition: CORS first on requests
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(security.router, prefix="/api/v1/security", tags=["Security"])
    app.include_router(config.router, prefix="/api/v1/config", tags=["Configuration"])
    app.include_router(rbac.router, prefix="/api/v1/rbac", tags=["RBAC"])
    app.include_router(
        vehicle_data.router,
        prefix="/api/v1/vehicle-data",
        tags=["Vehicle Data"],
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()

"""Global error handling to prevent information disclosure."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace_api.config import get_settings
from marketplace_api.exceptions import MarketplaceAPIError
from marketplace_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    500: "Internal server error",
    502: "Service unavailable",
    503: "Service temporarily unavailable",
}

# HTTPException details that don't reveal internal implementation details
ALLOWED_ERROR_PATTERNS = [
    "Authentication required",
    "Access denied",
    "Not authenticated",
    "Invalid or expired token",
    "Resource not found",
    "User not found",
    "Role not found",
]


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run before the CORS middleware can add headers to
    the response, so allowed origins are echoed here.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users."""
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Sanitize error detail to prevent information disclosure.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str):
        if is_safe_error_message(detail):
            return detail
    elif isinstance(detail, list):
        # Validation errors - keep field names and messages only
        safe_errors = []
        for error in detail:
            if isinstance(error, dict):
                loc = error.get("loc", [])
                msg = error.get("msg", "Invalid value")
                field = loc[-1] if loc else "field"
                if isinstance(field, str) and not field.startswith("_"):
                    safe_errors.append(f"{field}: {msg}")
        if safe_errors:
            return "; ".join(safe_errors[:3])

    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


def _error_response(request: Request, status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail},
        headers=_get_cors_headers(request),
    )


async def domain_exception_handler(request: Request, exc: MarketplaceAPIError) -> JSONResponse:
    """Map domain errors to their HTTP status.

    Domain error messages are written for end users and are returned as is.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the error message
    """
    if exc.status_code >= 500:
        provider = exc.details.get("provider")
        source = f" (provider {provider})" if provider else ""
        logger.warning(f"{type(exc).__name__} for {request.url.path}{source}: {exc.message}")

    return _error_response(request, exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, sanitizing the detail outside debug mode."""
    detail = exc.detail
    if not get_settings().debug:
        detail = sanitize_error_detail(detail, exc.status_code)
    return _error_response(request, exc.status_code, detail)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors (422)."""
    errors = exc.errors()
    logger.info(f"Rejected request body for {request.url.path}: {len(errors)} error(s)")

    detail: Any = errors if get_settings().debug else sanitize_error_detail(errors, 422)
    return _error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, detail)


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Unique violations (duplicate role, permission, feature or parameter
    codes) map to 409, foreign key violations to 400.
    """
    log_error(logger, f"Database error for {request.url.path}", exc)

    if isinstance(exc, IntegrityError):
        message = str(exc.orig or exc).lower()
        if "unique" in message or "duplicate" in message:
            return _error_response(request, status.HTTP_409_CONFLICT, "Resource already exists")
        if "foreign key" in message:
            return _error_response(
                request, status.HTTP_400_BAD_REQUEST, "Referenced resource not found"
            )

    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error occurred"
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions; full detail only in debug mode."""
    log_error(logger, f"Unhandled exception for {request.url.path}", exc)

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "type": type(exc).__name__},
            headers=_get_cors_headers(request),
        )
    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, SAFE_ERROR_MESSAGES[500]
    )

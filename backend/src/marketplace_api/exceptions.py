"""Domain-specific exceptions for the marketplace API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. Each class carries the HTTP status it maps to in
``status_code``, which is also what identifies an error as an already
classified domain failure.
"""

from typing import Any


class MarketplaceAPIError(Exception):
    """Base exception for all marketplace API errors."""

    status_code: int = 500

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Authentication / Authorization Errors (401, 403)
# =============================================================================


class UnauthenticatedError(MarketplaceAPIError):
    """Raised when no caller identity is available."""

    status_code = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(MarketplaceAPIError):
    """Raised when the caller's roles do not allow the action."""

    status_code = 403

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(MarketplaceAPIError):
    """Base class for resource not found errors."""

    status_code = 404


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: str | None = None, message: str = "User not found") -> None:
        details = {"user_id": str(user_id)} if user_id else {}
        super().__init__(message, details)


class RoleNotFoundError(NotFoundError):
    """Raised when a role cannot be found."""

    def __init__(self, role_code: str | None = None) -> None:
        details = {"role_code": role_code} if role_code else {}
        super().__init__("Role not found", details)


# =============================================================================
# Validation / Conflict Errors (400, 409)
# =============================================================================


class ValidationError(MarketplaceAPIError):
    """Base class for validation errors."""

    status_code = 400


class LastRoleRemovalError(ValidationError):
    """Raised when removing a role would leave a user without any role."""

    def __init__(self, user_id: str | None = None) -> None:
        details = {"user_id": str(user_id)} if user_id else {}
        super().__init__("Cannot remove user's last role", details)


class ConflictError(MarketplaceAPIError):
    """Base class for resource conflict errors."""

    status_code = 409


# =============================================================================
# Upstream Errors (502)
# =============================================================================


class DependencyFailureError(MarketplaceAPIError):
    """Raised when an external dependency call fails."""

    status_code = 502


class VehicleDataError(MarketplaceAPIError):
    """Base class for vehicle data provider failures."""

    status_code = 502

    def __init__(self, provider_name: str, message: str) -> None:
        self.provider_name = provider_name
        super().__init__(message, {"provider": provider_name})


class FetchFailure(VehicleDataError):
    """Raised when a provider request fails or returns no usable data."""

    pass


class DecodeFailure(VehicleDataError):
    """Raised when a provider response cannot be decoded."""

    pass

"""Secure logging utilities to prevent information disclosure."""

import logging
import re
from functools import lru_cache
from typing import Any

from marketplace_api.config import get_settings

_PATH_PATTERN = re.compile(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?")
_URL_PATTERN = re.compile(r"(postgresql|postgresql\+asyncpg|sqlite|http|https)://[^\s]+")
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
_BEARER_PATTERN = re.compile(r"Bearer\s+[A-Za-z0-9._\-]+", re.IGNORECASE)
_TOKEN_PATTERN = re.compile(r"[a-zA-Z0-9_\-]{32,}")

MAX_LOG_MESSAGE_LENGTH = 200


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def mask_identifier(value: str | None) -> str:
    """Mask an external identifier (e.g. an Azure AD B2C object id) for logs.

    Keeps the first four characters so log lines can still be correlated.
    """
    if not value:
        return "<none>"
    if len(value) <= 4:
        return "****"
    return f"{value[:4]}****"


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize exception message for logging in production.

    Removes potentially sensitive information like:
    - File system paths
    - Connection strings and upstream URLs
    - Email addresses
    - Bearer tokens, API keys and client secrets

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message suitable for production logs
    """
    error_msg = str(error)

    error_msg = _URL_PATTERN.sub("[URL]", error_msg)
    error_msg = _PATH_PATTERN.sub("[PATH]", error_msg)
    error_msg = _EMAIL_PATTERN.sub("[EMAIL]", error_msg)
    error_msg = _BEARER_PATTERN.sub("Bearer [TOKEN]", error_msg)
    error_msg = _TOKEN_PATTERN.sub("[TOKEN]", error_msg)

    if len(error_msg) > MAX_LOG_MESSAGE_LENGTH:
        error_msg = error_msg[: MAX_LOG_MESSAGE_LENGTH - 3] + "..."

    return error_msg


def _log(
    logger: logging.Logger,
    level: int,
    message: str,
    error: Exception | None,
    exc_info: bool,
    extra: dict[str, Any],
) -> None:
    if is_debug_mode():
        if error:
            logger.log(level, f"{message}: {error}", exc_info=exc_info, extra=extra)
        else:
            logger.log(level, message, extra=extra)
    elif error:
        logger.log(level, f"{message}: {type(error).__name__}: {sanitize_exception_message(error)}")
    else:
        logger.log(level, message)


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with appropriate detail level based on environment.

    In debug mode, logs full exception details including the traceback.
    Otherwise logs the exception type and a sanitized message only.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        **kwargs: Additional context, only attached in debug mode
    """
    _log(logger, logging.ERROR, message, error, True, kwargs)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log a warning with appropriate detail level based on environment.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        **kwargs: Additional context, only attached in debug mode
    """
    _log(logger, logging.WARNING, message, error, False, kwargs)

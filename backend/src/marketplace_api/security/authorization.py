"""Role-based authorization gate.

Sensitive actions are mapped to an explicit allow-list of role codes. The
gate is a plain membership test: a caller is allowed when they hold at
least one role of the allow-list. Role levels are not compared.
"""

from collections.abc import Callable, Coroutine, Iterable
from enum import StrEnum
from typing import Annotated, Any

from fastapi import Depends

from marketplace_api.exceptions import ForbiddenError
from marketplace_api.models.domain.caller import CallerContext
from marketplace_api.models.domain.role import RoleCode
from marketplace_api.security.auth import get_current_caller


class Capability(StrEnum):
    """Sensitive actions guarded by a role allow-list."""

    MANAGE_MFA = "security.manage_mfa"
    MANAGE_ROLES = "rbac.manage_roles"


SELLER_ROLES: frozenset[RoleCode] = frozenset(
    {RoleCode.PRIVATE_SELLER, RoleCode.PROFESSIONAL_SELLER}
)

CAPABILITY_ROLES: dict[Capability, frozenset[RoleCode]] = {
    Capability.MANAGE_MFA: SELLER_ROLES,
    Capability.MANAGE_ROLES: frozenset({RoleCode.ADMINISTRATOR}),
}

FORBIDDEN_MESSAGES: dict[Capability, str] = {
    Capability.MANAGE_MFA: "Only seller accounts can manage 2FA",
    Capability.MANAGE_ROLES: "Only administrators can manage roles",
}


def is_authorized(roles: Iterable[RoleCode], allowed: frozenset[RoleCode]) -> bool:
    """Return True if any of ``roles`` is in the ``allowed`` set."""
    return any(role in allowed for role in roles)


def can(caller: CallerContext, capability: Capability) -> bool:
    """Check a caller against the allow-list of a capability."""
    return is_authorized(caller.roles, CAPABILITY_ROLES[capability])


def ensure_capability(caller: CallerContext, capability: Capability) -> None:
    """Raise ForbiddenError unless the caller may perform ``capability``."""
    if not can(caller, capability):
        raise ForbiddenError(FORBIDDEN_MESSAGES.get(capability, "Access denied"))


def require_capability(
    capability: Capability,
) -> Callable[..., Coroutine[Any, Any, CallerContext]]:
    """Dependency factory requiring the caller to hold an allowed role.

    Args:
        capability: Capability to check

    Returns:
        FastAPI dependency returning the caller
    """

    async def dependency(
        caller: Annotated[CallerContext, Depends(get_current_caller)],
    ) -> CallerContext:
        ensure_capability(caller, capability)
        return caller

    return dependency

"""Principal guards shared by the use cases."""

from __future__ import annotations

from backoffice.domain.exceptions import ForbiddenError
from backoffice.domain.model.principal import AdminPrincipal, Principal, UserPrincipal


def require_admin(principal: Principal) -> AdminPrincipal:
    if not isinstance(principal, AdminPrincipal):
        raise ForbiddenError("admin only")
    return principal


def require_user(principal: Principal) -> UserPrincipal:
    if not isinstance(principal, UserPrincipal):
        raise ForbiddenError("user account required")
    return principal

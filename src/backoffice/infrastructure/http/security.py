"""Caller identity for HTTP requests.

Token verification belongs to an external identity provider; this module
only extracts the bearer token and asks the provider which principal it
stands for. The provider raises ``AuthenticationError`` for tokens it
does not accept.
"""

from __future__ import annotations

from typing import Annotated, Protocol

from fastapi import Depends, Request

from backoffice.application.access import require_admin, require_user
from backoffice.domain.exceptions import AuthenticationError
from backoffice.domain.model.principal import AdminPrincipal, Principal, UserPrincipal


class IdentityProvider(Protocol):
    def resolve(self, token: str) -> Principal: ...


def bearer_token(authorization: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def current_principal(request: Request) -> Principal:
    token = bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise AuthenticationError("Unauthorized")
    identity: IdentityProvider = request.app.state.identity
    return identity.resolve(token)


def admin_principal(
    principal: Annotated[Principal, Depends(current_principal)],
) -> AdminPrincipal:
    return require_admin(principal)


def user_principal(
    principal: Annotated[Principal, Depends(current_principal)],
) -> UserPrincipal:
    return require_user(principal)


AdminDep = Annotated[AdminPrincipal, Depends(admin_principal)]
UserDep = Annotated[UserPrincipal, Depends(user_principal)]

"""Authenticated actors.

A request is made either by the back-office administrator or by one
specific shopper. The two kinds are separate types so that an admin can
never be mistaken for a user id and a shopper never passes an admin check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AdminPrincipal:
    """The back-office administrator. Carries no user identity."""


@dataclass(frozen=True)
class UserPrincipal:
    user_id: str


Principal = Union[AdminPrincipal, UserPrincipal]

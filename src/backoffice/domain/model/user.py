"""User aggregate: a shopper account that orders belong to."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    id: str
    name: str
    email: str  # stored lowercased, unique across users
    phone: str = ""
    address: str = ""
    is_active: bool = True

"""Application service: Add User use case."""

from __future__ import annotations

import re

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.identifiers import new_id
from backoffice.domain.model.user import User
from backoffice.domain.repository.user_repository import UserRepository

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AddUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, name: str, email: str, phone: str = "", address: str = "") -> User:
        """Register a shopper. Emails are unique regardless of case."""
        if not name or not name.strip():
            raise ValidationError("User name is required")
        email = (email or "").strip().lower()
        if not EMAIL_RE.match(email):
            raise ValidationError(f"Invalid email: {email!r}")
        if self._user_repo.get_by_email(email) is not None:
            raise ValidationError(f"Email '{email}' already registered")

        user = User(
            id=new_id(),
            name=name.strip(),
            email=email,
            phone=phone.strip(),
            address=address.strip(),
        )
        self._user_repo.save(user)
        return user

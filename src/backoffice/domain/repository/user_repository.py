"""Abstract repository for the User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from backoffice.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by email (case-insensitive), or None."""

    @abstractmethod
    def find_by_ids(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Batch lookup. Missing IDs are simply absent."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""

    def exists(self, user_id: str) -> bool:
        return self.get_by_id(user_id) is not None

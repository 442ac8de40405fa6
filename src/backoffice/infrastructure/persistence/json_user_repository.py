"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from backoffice.domain.model.user import User
from backoffice.domain.repository.user_repository import UserRepository
from backoffice.infrastructure.persistence.json_file import (
    ensure_file,
    lock_for,
    read_records,
    write_records,
)


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path)
        ensure_file(file_path)

    def get_by_id(self, user_id: str) -> User | None:
        return self._load().get(user_id)

    def get_by_email(self, email: str) -> User | None:
        for user in self._load().values():
            if user.email.lower() == email.lower():
                return user
        return None

    def find_by_ids(self, user_ids: Iterable[str]) -> dict[str, User]:
        users = self._load()
        return {uid: users[uid] for uid in user_ids if uid in users}

    def list_all(self) -> list[User]:
        return list(self._load().values())

    def save(self, user: User) -> None:
        with self._lock:
            users = self._load()
            users[user.id] = user
            self._persist(users)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, User]:
        raw = read_records(self._file_path)
        return {
            item["id"]: User(
                id=item["id"],
                name=item["name"],
                email=item["email"],
                phone=item.get("phone", ""),
                address=item.get("address", ""),
                is_active=item.get("isActive", True),
            )
            for item in raw
        }

    def _persist(self, users: dict[str, User]) -> None:
        raw = [
            {
                "id": u.id,
                "name": u.name,
                "email": u.email,
                "phone": u.phone,
                "address": u.address,
                "isActive": u.is_active,
            }
            for u in users.values()
        ]
        write_records(self._file_path, raw)

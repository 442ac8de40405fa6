"""MongoDB-backed implementation of UserRepository."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone

from pymongo.collection import Collection

from backoffice.domain.exceptions import StoreError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.user import User
from backoffice.domain.repository.user_repository import UserRepository
from backoffice.infrastructure.persistence.bson_codec import object_id, read_id
from backoffice.infrastructure.persistence.mongo_store import MongoStore, translate_errors

COLLECTION = "users"


class MongoUserRepository(UserRepository):

    def __init__(self, store: MongoStore) -> None:
        self._store = store

    @property
    def _collection(self) -> Collection:
        return self._store.collection(COLLECTION)

    @translate_errors
    def get_by_id(self, user_id: str) -> User | None:
        if not is_valid_id(user_id):
            return None
        doc = self._collection.find_one({"_id": object_id(user_id)})
        return self._to_domain(doc) if doc is not None else None

    @translate_errors
    def get_by_email(self, email: str) -> User | None:
        pattern = f"^{re.escape(email)}$"
        doc = self._collection.find_one({"email": {"$regex": pattern, "$options": "i"}})
        return self._to_domain(doc) if doc is not None else None

    @translate_errors
    def find_by_ids(self, user_ids: Iterable[str]) -> dict[str, User]:
        ids = [object_id(uid) for uid in set(user_ids) if is_valid_id(uid)]
        if not ids:
            return {}
        users = (self._to_domain(doc) for doc in self._collection.find({"_id": {"$in": ids}}))
        return {u.id: u for u in users}

    @translate_errors
    def list_all(self) -> list[User]:
        return [self._to_domain(doc) for doc in self._collection.find({}).sort("name")]

    @translate_errors
    def save(self, user: User) -> None:
        self._collection.update_one(
            {"_id": object_id(user.id)},
            {
                "$set": {
                    "name": user.name,
                    "email": user.email,
                    "phone": user.phone,
                    "address": user.address,
                    "isActive": user.is_active,
                    "updatedAt": datetime.now(timezone.utc),
                },
                "$setOnInsert": {"createdAt": datetime.now(timezone.utc)},
            },
            upsert=True,
        )

    @staticmethod
    def _to_domain(doc: dict) -> User:
        try:
            return User(
                id=read_id(doc["_id"]),
                name=doc["name"],
                email=doc["email"],
                phone=doc.get("phone") or "",
                address=doc.get("address") or "",
                is_active=bool(doc.get("isActive", True)),
            )
        except KeyError as exc:
            raise StoreError(f"Malformed user document {doc.get('_id')!r}: missing {exc}") from exc

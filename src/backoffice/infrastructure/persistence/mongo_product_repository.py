"""MongoDB-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from pymongo.collection import Collection

from backoffice.domain.exceptions import DomainException, StoreError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import DEFAULT_CURRENCY, Money
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.infrastructure.persistence.bson_codec import (
    decimal128,
    object_id,
    read_decimal,
    read_id,
)
from backoffice.infrastructure.persistence.mongo_store import MongoStore, translate_errors

COLLECTION = "products"


class MongoProductRepository(ProductRepository):

    def __init__(self, store: MongoStore) -> None:
        self._store = store

    @property
    def _collection(self) -> Collection:
        return self._store.collection(COLLECTION)

    @translate_errors
    def get_by_id(self, product_id: str) -> Product | None:
        if not is_valid_id(product_id):
            return None
        doc = self._collection.find_one({"_id": object_id(product_id)})
        return self._to_domain(doc) if doc is not None else None

    def find_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        return self._find_many(product_ids, {})

    def find_active_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        return self._find_many(product_ids, {"isActive": True})

    @translate_errors
    def list_all(self, active_only: bool = False) -> list[Product]:
        query = {"isActive": True} if active_only else {}
        return [self._to_domain(doc) for doc in self._collection.find(query).sort("name")]

    @translate_errors
    def save(self, product: Product) -> None:
        self._collection.update_one(
            {"_id": object_id(product.id)},
            {
                "$set": {
                    "name": product.name,
                    "sku": product.sku,
                    "description": product.description,
                    "imageUrl": product.image_url,
                    "categoryId": object_id(product.category_id) if product.category_id else None,
                    "price": decimal128(product.price.amount),
                    "currency": product.price.currency,
                    "isActive": product.is_active,
                    "updatedAt": datetime.now(timezone.utc),
                },
                "$setOnInsert": {"createdAt": datetime.now(timezone.utc)},
            },
            upsert=True,
        )

    # --- Helpers --------------------------------------------------------------

    @translate_errors
    def _find_many(self, product_ids: Iterable[str], extra: dict) -> dict[str, Product]:
        ids = [object_id(pid) for pid in set(product_ids) if is_valid_id(pid)]
        if not ids:
            return {}
        cursor = self._collection.find({"_id": {"$in": ids}, **extra})
        products = (self._to_domain(doc) for doc in cursor)
        return {p.id: p for p in products}

    @staticmethod
    def _to_domain(doc: dict) -> Product:
        try:
            category = doc.get("categoryId")
            return Product(
                id=read_id(doc["_id"]),
                name=doc["name"],
                price=Money(read_decimal(doc["price"]), doc.get("currency", DEFAULT_CURRENCY)),
                sku=doc.get("sku") or "",
                image_url=doc.get("imageUrl") or "",
                description=doc.get("description") or "",
                category_id=read_id(category) if category is not None else None,
                is_active=bool(doc.get("isActive", True)),
            )
        except StoreError:
            raise
        except (KeyError, TypeError, DomainException) as exc:
            raise StoreError(f"Malformed product document {doc.get('_id')!r}: {exc}") from exc

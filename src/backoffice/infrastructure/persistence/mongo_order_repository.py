"""MongoDB-backed implementation of OrderRepository.

Orders live in the ``transaksis`` collection. Prices and totals are
stored as Decimal128 so amounts round-trip exactly.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import InvalidOperation

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from backoffice.domain.exceptions import DomainException, StoreError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.infrastructure.persistence.bson_codec import (
    decimal128,
    object_id,
    read_decimal,
    read_id,
)
from backoffice.infrastructure.persistence.mongo_store import MongoStore, translate_errors

COLLECTION = "transaksis"


class MongoOrderRepository(OrderRepository):

    def __init__(self, store: MongoStore) -> None:
        self._store = store

    @property
    def _collection(self) -> Collection:
        return self._store.collection(COLLECTION)

    # --- OrderRepository interface --------------------------------------------

    @translate_errors
    def create(self, order: Order) -> Order:
        result = self._collection.insert_one(self._to_document(order))
        order.id = str(result.inserted_id)
        return order

    @translate_errors
    def find_by_id(self, order_id: str) -> Order | None:
        if not is_valid_id(order_id):
            return None
        doc = self._collection.find_one({"_id": object_id(order_id)})
        return self._to_domain(doc) if doc is not None else None

    @translate_errors
    def find_by_user(self, user_id: str) -> list[Order]:
        if not is_valid_id(user_id):
            return []
        cursor = self._collection.find({"userId": object_id(user_id)}).sort("createdAt", DESCENDING)
        return [self._to_domain(doc) for doc in cursor]

    @translate_errors
    def find_all(self) -> list[Order]:
        cursor = self._collection.find({}).sort("createdAt", DESCENDING)
        return [self._to_domain(doc) for doc in cursor]

    @translate_errors
    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        if not is_valid_id(order_id):
            return None
        doc = self._collection.find_one_and_update(
            {"_id": object_id(order_id)},
            {"$set": {"status": status.value, "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return self._to_domain(doc) if doc is not None else None

    @translate_errors
    def delete(self, order_id: str) -> bool:
        if not is_valid_id(order_id):
            return False
        result = self._collection.delete_one({"_id": object_id(order_id)})
        return result.deleted_count == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(order: Order) -> dict:
        total = order.total
        return {
            "userId": object_id(order.user_id),
            "items": [
                {
                    "productId": object_id(item.product_id),
                    "qty": item.quantity.value,
                    "price": decimal128(item.unit_price.amount),
                }
                for item in order.items
            ],
            "total": decimal128(total.amount),
            "currency": total.currency,
            "status": order.status.value,
            "createdAt": order.created_at,
            "updatedAt": order.updated_at,
        }

    @staticmethod
    def _to_domain(doc: dict) -> Order:
        """Rebuild an order; a document that does not parse is a store fault."""
        try:
            currency = doc.get("currency", DEFAULT_CURRENCY)
            items = tuple(
                OrderLineItem(
                    product_id=read_id(i["productId"]),
                    quantity=Quantity(i["qty"]),
                    unit_price=Money(read_decimal(i["price"]), currency),
                )
                for i in doc["items"]
            )
            created_at = doc["createdAt"]
            if not isinstance(created_at, datetime):
                raise StoreError(f"createdAt is not a date: {created_at!r}")
            return Order(
                id=read_id(doc["_id"]),
                user_id=read_id(doc["userId"]),
                items=items,
                status=OrderStatus(doc["status"]),
                created_at=created_at,
                updated_at=doc.get("updatedAt"),
            )
        except StoreError:
            raise
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            raise StoreError(f"Malformed order document {doc.get('_id')!r}: {exc}") from exc

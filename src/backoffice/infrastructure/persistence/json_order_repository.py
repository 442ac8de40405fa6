"""JSON-file-backed implementation of OrderRepository.

Records use the same field names as the document store
(``userId``, ``items[].productId``, ``qty``, ``price``, ``total``,
``createdAt``, ``updatedAt``) so data can move between the two.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path

from backoffice.domain.exceptions import DomainException, StoreError
from backoffice.domain.model.identifiers import new_id
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.infrastructure.persistence.json_file import (
    ensure_file,
    lock_for,
    read_records,
    write_records,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path)
        ensure_file(file_path)

    # --- OrderRepository interface --------------------------------------------

    def create(self, order: Order) -> Order:
        with self._lock:
            orders = self._load_raw()
            order.id = new_id()
            orders.append(self._to_raw(order))
            self._persist_raw(orders)
        return order

    def find_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_by_user(self, user_id: str) -> list[Order]:
        return self._newest_first(
            raw for raw in self._load_raw() if raw["userId"] == user_id
        )

    def find_all(self) -> list[Order]:
        return self._newest_first(self._load_raw())

    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        with self._lock:
            orders = self._load_raw()
            for raw in orders:
                if raw["id"] == order_id:
                    raw["status"] = status.value
                    raw["updatedAt"] = datetime.now(timezone.utc).isoformat()
                    self._persist_raw(orders)
                    return self._to_domain(raw)
        return None

    def delete(self, order_id: str) -> bool:
        with self._lock:
            orders = self._load_raw()
            remaining = [raw for raw in orders if raw["id"] != order_id]
            if len(remaining) == len(orders):
                return False
            self._persist_raw(remaining)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        total = order.total
        return {
            "id": order.id,
            "userId": order.user_id,
            "items": [
                {
                    "productId": item.product_id,
                    "qty": item.quantity.value,
                    "price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
            "total": str(total.amount),
            "currency": total.currency,
            "status": order.status.value,
            "createdAt": order.created_at.isoformat(),
            "updatedAt": order.updated_at.isoformat() if order.updated_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        """Rebuild an order; a record that does not parse is a store fault."""
        try:
            currency = raw.get("currency", DEFAULT_CURRENCY)
            items = tuple(
                OrderLineItem(
                    product_id=i["productId"],
                    quantity=Quantity(i["qty"]),
                    unit_price=Money(Decimal(str(i["price"])), currency),
                )
                for i in raw["items"]
            )
            updated_at = raw.get("updatedAt")
            return Order(
                id=raw["id"],
                user_id=raw["userId"],
                items=items,
                status=OrderStatus(raw["status"]),
                created_at=datetime.fromisoformat(raw["createdAt"]),
                updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            )
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            raise StoreError(f"Malformed order record {raw.get('id')!r}: {exc}") from exc

    def _newest_first(self, raws) -> list[Order]:
        orders = [self._to_domain(raw) for raw in raws]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return read_records(self._file_path)

    def _persist_raw(self, orders: list[dict]) -> None:
        write_records(self._file_path, orders)

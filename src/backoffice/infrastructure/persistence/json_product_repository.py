"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path

from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import DEFAULT_CURRENCY, Money
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.infrastructure.persistence.json_file import (
    ensure_file,
    lock_for,
    read_records,
    write_records,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path)
        ensure_file(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def find_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        products = self._load()
        return {pid: products[pid] for pid in product_ids if pid in products}

    def find_active_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        return {
            pid: p for pid, p in self.find_by_ids(product_ids).items() if p.is_active
        }

    def list_all(self, active_only: bool = False) -> list[Product]:
        products = list(self._load().values())
        if active_only:
            products = [p for p in products if p.is_active]
        return products

    def save(self, product: Product) -> None:
        with self._lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = read_records(self._file_path)
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(Decimal(str(item["price"])), item.get("currency", DEFAULT_CURRENCY)),
                sku=item.get("sku", ""),
                image_url=item.get("imageUrl", ""),
                description=item.get("description", ""),
                category_id=item.get("categoryId"),
                is_active=item.get("isActive", True),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "sku": p.sku,
                "description": p.description,
                "imageUrl": p.image_url,
                "categoryId": p.category_id,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "isActive": p.is_active,
            }
            for p in products.values()
        ]
        write_records(self._file_path, raw)

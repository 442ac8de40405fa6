"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, MongoDB)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from backoffice.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Batch lookup, active or not. Missing IDs are simply absent."""

    @abstractmethod
    def find_active_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Batch lookup restricted to active products."""

    @abstractmethod
    def list_all(self, active_only: bool = False) -> list[Product]:
        """Return products in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def change_price(self, product_id: str, new_price: str) -> Product:
        """Update a product's price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        product = self._load(product_id)
        product.update_price(Money.of(new_price))
        self._product_repo.save(product)
        logger.info("product price changed", extra={"product_id": product_id, "price": new_price})
        return product

    def set_active(self, product_id: str, active: bool) -> Product:
        product = self._load(product_id)
        if active:
            product.activate()
        else:
            product.deactivate()
        self._product_repo.save(product)
        return product

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

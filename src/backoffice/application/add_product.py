"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.identifiers import is_valid_id, new_id
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        sku: str = "",
        image_url: str = "",
        description: str = "",
        category_id: str | None = None,
    ) -> Product:
        """Add a new, active product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if category_id is not None and not is_valid_id(category_id):
            raise ValidationError(f"invalid categoryId: {category_id}")

        product = Product(
            id=new_id(),
            name=name.strip(),
            price=Money.of(price),
            sku=sku.strip(),
            image_url=image_url.strip(),
            description=description,
            category_id=category_id,
        )
        self._product_repo.save(product)
        logger.info("product added", extra={"product_id": product.id, "price": str(product.price.amount)})
        return product

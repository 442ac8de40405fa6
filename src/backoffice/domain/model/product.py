"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are switched on and off in the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Orders reference a product by ``id`` only and copy its ``price`` at
    creation time, so every mutation here is invisible to existing orders.
    """

    id: str
    name: str
    price: Money
    sku: str = ""
    image_url: str = ""
    description: str = ""
    category_id: str | None = None
    is_active: bool = True

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        """Hide the product from shoppers; admins can still order it."""
        self.is_active = False

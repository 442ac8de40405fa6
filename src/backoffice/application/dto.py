"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the caller asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Current catalog view of a product referenced by an order line."""

    id: str
    name: str
    sku: str
    price: Decimal  # today's price, NOT the order's snapshot
    image_url: str


@dataclass(frozen=True)
class UserSummaryDTO:
    id: str
    name: str
    email: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the caller."""

    product_id: str
    quantity: int
    price: Decimal  # snapshot taken at order creation
    line_total: Decimal
    product: ProductSummaryDTO | None  # None once the product is removed


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the caller."""

    id: str
    user_id: str
    user: UserSummaryDTO | None
    status: str
    items: list[OrderLineItemDTO]
    total: Decimal
    currency: str
    created_at: datetime
    updated_at: datetime | None

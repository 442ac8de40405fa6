"""Domain service: Price Snapshot.

Turns a requested list of ``(product_id, qty)`` pairs into order line
items priced from the live catalog. It lives in the domain layer
because "an order line carries the price the product had when the order
was placed" is a core business rule, not just orchestration.

Validation runs completely before any line item is built, so an order
with one bad line is rejected as a whole.
"""

from __future__ import annotations

from collections.abc import Sequence

from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.order import OrderLineItem
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.product_repository import ProductRepository


class PriceSnapshotService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def snapshot(
        self,
        requested: Sequence[tuple[str, object]],
        active_only: bool,
    ) -> list[OrderLineItem]:
        """Validate the requested lines and price them.

        Checks, in order, each failing fast:
          1. at least one line
          2. every product id is well formed
          3. every product resolves in ONE batched lookup (restricted to
             active products when ``active_only``)
          4. every quantity is a whole number >= 1

        Args:
            requested: ``(product_id, qty)`` pairs in display order.
                Duplicated product ids are kept as separate lines.
            active_only: True on the shopper path, False for admins.

        Returns:
            One ``OrderLineItem`` per requested pair, in the same order.
        """
        if not requested:
            raise ValidationError("items required")

        for product_id, _ in requested:
            if not is_valid_id(product_id):
                raise ValidationError(f"invalid productId: {product_id}")

        products = self._resolve([product_id for product_id, _ in requested], active_only)
        for product_id, _ in requested:
            if product_id not in products:
                raise EntityNotFoundError(f"product not found: {product_id}")

        quantities = [Quantity(qty) for _, qty in requested]  # type: ignore[arg-type]

        return [
            OrderLineItem(
                product_id=product_id,
                quantity=quantity,
                unit_price=products[product_id].price,  # <-- price snapshot
            )
            for (product_id, _), quantity in zip(requested, quantities)
        ]

    def _resolve(self, product_ids: list[str], active_only: bool) -> dict[str, Product]:
        unique_ids = list(dict.fromkeys(product_ids))
        if active_only:
            return self._product_repo.find_active_by_ids(unique_ids)
        return self._product_repo.find_by_ids(unique_ids)

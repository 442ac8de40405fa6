"""Read-side projection of orders for display.

Expands the product and user references of stored orders into their
current display fields. The projection only ever reads; nothing it looks
up flows back into a stored order.
"""

from __future__ import annotations

from backoffice.application.dto import (
    OrderDTO,
    OrderLineItemDTO,
    ProductSummaryDTO,
    UserSummaryDTO,
)
from backoffice.domain.model.order import Order
from backoffice.domain.model.product import Product
from backoffice.domain.model.user import User
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.user_repository import UserRepository


class OrderProjector:

    def __init__(
        self,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._product_repo = product_repo
        self._user_repo = user_repo

    def project(self, order: Order) -> OrderDTO:
        return self.project_many([order])[0]

    def project_many(self, orders: list[Order]) -> list[OrderDTO]:
        """Project a batch with one product lookup and one user lookup."""
        if not orders:
            return []
        product_ids = {item.product_id for order in orders for item in order.items}
        user_ids = {order.user_id for order in orders}
        products = self._product_repo.find_by_ids(product_ids)
        users = self._user_repo.find_by_ids(user_ids)
        return [self._to_dto(order, products, users) for order in orders]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(
        order: Order,
        products: dict[str, Product],
        users: dict[str, User],
    ) -> OrderDTO:
        user = users.get(order.user_id)
        total = order.total
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            user_id=order.user_id,
            user=(
                UserSummaryDTO(id=user.id, name=user.name, email=user.email)
                if user is not None
                else None
            ),
            status=order.status.value,
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    price=item.unit_price.amount,
                    line_total=item.line_total.amount,
                    product=_product_summary(products.get(item.product_id)),
                )
                for item in order.items
            ],
            total=total.amount,
            currency=total.currency,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


def _product_summary(product: Product | None) -> ProductSummaryDTO | None:
    if product is None:
        return None
    return ProductSummaryDTO(
        id=product.id,
        name=product.name,
        sku=product.sku,
        price=product.price.amount,
        image_url=product.image_url,
    )

"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (User
check + Product lookup + Order creation).
"""

from __future__ import annotations

import logging

from backoffice.application.dto import OrderDTO, OrderItemSpec
from backoffice.application.projection import OrderProjector
from backoffice.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.order import Order
from backoffice.domain.model.principal import Principal, UserPrincipal
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.user_repository import UserRepository
from backoffice.domain.service.price_snapshot_service import PriceSnapshotService

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._user_repo = user_repo

    def handle(
        self,
        principal: Principal,
        user_id: str,
        item_specs: list[OrderItemSpec],
    ) -> OrderDTO:
        """Create a new purchase order.

        Steps:
        1. Check the purchasing user: shoppers may only order for
           themselves, admins may order for any existing user.
        2. Price every line from the catalog (snapshot); shoppers can
           only order active products.
        3. Persist the pending order in a single write.
        4. Return the order projected for display.

        Nothing is written unless every check passes.
        """
        if not is_valid_id(user_id):
            raise ValidationError("invalid userId")

        if isinstance(principal, UserPrincipal):
            if principal.user_id != user_id:
                raise ForbiddenError("cannot place an order for another user")
            active_only = True
        else:
            if not self._user_repo.exists(user_id):
                raise EntityNotFoundError(f"user not found: {user_id}")
            active_only = False

        line_items = PriceSnapshotService(self._product_repo).snapshot(
            [(spec.product_id, spec.quantity) for spec in item_specs],
            active_only=active_only,
        )

        order = self._order_repo.create(Order.create(user_id=user_id, items=line_items))
        logger.info(
            "order created",
            extra={
                "order_id": order.id,
                "user_id": order.user_id,
                "lines": len(order.items),
                "total": str(order.total.amount),
            },
        )

        return OrderProjector(self._product_repo, self._user_repo).project(order)

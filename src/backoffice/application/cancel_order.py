"""Application service: Cancel Order use case (shopper self-service).

A shopper may cancel their own order while it is still pending or paid.
Cancelling an order that is already cancelled succeeds without a write;
shipped and done orders refuse. Administrators change status through
``SetOrderStatusHandler`` instead.
"""

from __future__ import annotations

import logging

from backoffice.application.access import require_user
from backoffice.application.dto import OrderDTO
from backoffice.application.projection import OrderProjector
from backoffice.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
    ValidationError,
)
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.principal import Principal
from backoffice.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        projector: OrderProjector,
    ) -> None:
        self._order_repo = order_repo
        self._projector = projector

    def handle(self, principal: Principal, order_id: str) -> OrderDTO:
        user = require_user(principal)
        if not is_valid_id(order_id):
            raise ValidationError(f"invalid order id: {order_id}")

        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        if not order.is_owned_by(user.user_id):
            raise ForbiddenError(f"Order {order_id} belongs to another user")

        try:
            changed = order.cancel()
        except InvalidStateError:
            logger.warning(
                "cancel rejected",
                extra={"order_id": order_id, "status": order.status.value},
            )
            raise

        if changed:
            stored = self._order_repo.update_status(order_id, order.status)
            if stored is None:
                raise EntityNotFoundError(f"Order {order_id} not found")
            order = stored
            logger.info("order cancelled", extra={"order_id": order_id})

        return self._projector.project(order)

"""Application service: Set Order Status use case (admin).

Status assignment by the back office is unrestricted: any of the five
statuses may be set from any current status, including moving a done
order back to pending.
"""

from __future__ import annotations

import logging

from backoffice.application.access import require_admin
from backoffice.application.dto import OrderDTO
from backoffice.application.projection import OrderProjector
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.principal import Principal
from backoffice.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class SetOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        projector: OrderProjector,
    ) -> None:
        self._order_repo = order_repo
        self._projector = projector

    def handle(self, principal: Principal, order_id: str, status: str) -> OrderDTO:
        require_admin(principal)
        new_status = OrderStatus.parse(status)
        if not is_valid_id(order_id):
            raise ValidationError(f"invalid order id: {order_id}")

        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        previous = order.status
        order.set_status(new_status)

        stored = self._order_repo.update_status(order_id, order.status)
        if stored is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        logger.info(
            "order status set",
            extra={"order_id": order_id, "from": previous.value, "to": new_status.value},
        )
        return self._projector.project(stored)

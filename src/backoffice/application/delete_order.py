"""Application service: Delete Order use case (admin).

Hard delete with no status guard — unlike cancellation, an admin may
remove an order in any status, including done.
"""

from __future__ import annotations

import logging

from backoffice.application.access import require_admin
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.principal import Principal
from backoffice.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: str) -> None:
        require_admin(principal)
        if not is_valid_id(order_id):
            raise ValidationError(f"invalid order id: {order_id}")

        if not self._order_repo.delete(order_id):
            raise EntityNotFoundError(f"Order {order_id} not found")
        logger.info("order deleted", extra={"order_id": order_id})

"""Application service: Show Order use case (query)."""

from __future__ import annotations

from backoffice.application.dto import OrderDTO
from backoffice.application.projection import OrderProjector
from backoffice.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.principal import Principal, UserPrincipal
from backoffice.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, projector: OrderProjector) -> None:
        self._order_repo = order_repo
        self._projector = projector

    def handle(self, principal: Principal, order_id: str) -> OrderDTO:
        if not is_valid_id(order_id):
            raise ValidationError(f"invalid order id: {order_id}")
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        if isinstance(principal, UserPrincipal) and not order.is_owned_by(principal.user_id):
            raise ForbiddenError(f"Order {order_id} belongs to another user")
        return self._projector.project(order)

"""Application service: List Orders use cases (query).

Shoppers see their own orders, the back office sees everything. Both
lists are newest first.
"""

from __future__ import annotations

from backoffice.application.access import require_admin, require_user
from backoffice.application.dto import OrderDTO
from backoffice.application.projection import OrderProjector
from backoffice.domain.model.principal import Principal
from backoffice.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, projector: OrderProjector) -> None:
        self._order_repo = order_repo
        self._projector = projector

    def list_own(self, principal: Principal) -> list[OrderDTO]:
        user = require_user(principal)
        return self._projector.project_many(self._order_repo.find_by_user(user.user_id))

    def list_all(self, principal: Principal) -> list[OrderDTO]:
        require_admin(principal)
        return self._projector.project_many(self._order_repo.find_all())

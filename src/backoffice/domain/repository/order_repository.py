"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Persist a new order, assign its ID and return it."""

    @abstractmethod
    def find_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_by_user(self, user_id: str) -> list[Order]:
        """Return the orders of one user, newest first."""

    @abstractmethod
    def find_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        """Set the status and stamp ``updated_at``; None if the order is gone.

        Items, prices and total are never rewritten after creation.
        """

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Hard-delete an order. False if there was nothing to delete."""

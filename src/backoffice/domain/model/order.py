"""Order (transaksi) aggregate — the core of the domain.

The Order is an aggregate root that owns its line items. Line items and
their price snapshots are fixed at creation; afterwards only the status
(and the ``updated_at`` metadata) may change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from backoffice.domain.exceptions import InvalidStateError, ValidationError
from backoffice.domain.model.value_objects import Money, Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DONE = "done"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str) -> OrderStatus:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"invalid status: {value!r} (expected one of {allowed})"
            ) from None


# A shopper may not cancel once the parcel has left.
NON_CANCELLABLE = frozenset({OrderStatus.SHIPPED, OrderStatus.DONE})


@dataclass(frozen=True)
class OrderLineItem:
    """A quantity of one product at the price it had when the order was made."""

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders — it enforces the
    creation invariants. The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str | None
    user_id: str
    items: tuple[OrderLineItem, ...]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: str, items: list[OrderLineItem]) -> Order:
        """Create a new pending order."""
        if not items:
            raise ValidationError("items required")
        now = _now()
        return Order(
            id=None,
            user_id=user_id,
            items=tuple(items),
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> bool:
        """Self-service cancellation.

        Returns False when the order was already cancelled (nothing to do),
        True when it moved to CANCELLED.
        """
        if self.status == OrderStatus.CANCELLED:
            return False
        if self.status in NON_CANCELLABLE:
            raise InvalidStateError("cannot cancel")
        self._move_to(OrderStatus.CANCELLED)
        return True

    def set_status(self, status: OrderStatus) -> None:
        """Administrative status assignment; any state to any state."""
        self._move_to(status)

    # --- Queries --------------------------------------------------------------

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    @property
    def total(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency) if self.items else Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    # --- Internal helpers -----------------------------------------------------

    def _move_to(self, status: OrderStatus) -> None:
        self.status = status
        self.updated_at = _now()

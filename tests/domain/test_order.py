"""Unit tests for the Order aggregate and its business rules."""

import pytest

from backoffice.domain.exceptions import InvalidStateError, ValidationError
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.value_objects import Money, Quantity

ALICE = f"{1:024x}"
BOB = f"{2:024x}"


def _make_item(product: int = 1, qty: int = 1, price: str = "10") -> OrderLineItem:
    """Helper to build a valid line item."""
    return OrderLineItem(
        product_id=f"{product + 100:024x}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _order_in(status: OrderStatus) -> Order:
    order = Order.create(ALICE, [_make_item()])
    order.status = status
    return order


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(ALICE, [_make_item(qty=2, price="10")])
        assert order.user_id == ALICE
        assert order.status == OrderStatus.PENDING
        assert len(order.items) == 1
        assert order.total == Money.of("20")

    def test_id_is_none_for_new_orders(self):
        order = Order.create(ALICE, [_make_item()])
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_line_items(self):
        # 2 x 10 + 1 x 5
        order = Order.create(
            ALICE, [_make_item(1, qty=2, price="10"), _make_item(2, qty=1, price="5")]
        )
        assert order.total == Money.of("25")

    def test_zero_priced_line_allowed(self):
        order = Order.create(ALICE, [_make_item(price="0")])
        assert order.total == Money.zero()

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="items required"):
            Order.create(ALICE, [])

    def test_timestamps_set(self):
        order = Order.create(ALICE, [_make_item()])
        assert order.created_at is not None
        assert order.updated_at == order.created_at

    def test_items_are_immutable(self):
        order = Order.create(ALICE, [_make_item()])
        assert isinstance(order.items, tuple)
        with pytest.raises(AttributeError):
            order.items[0].unit_price = Money.of("99")  # type: ignore[misc]


class TestOrderCancel:

    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.PAID])
    def test_cancellable_statuses(self, status):
        order = _order_in(status)
        assert order.cancel() is True
        assert order.status == OrderStatus.CANCELLED

    def test_cancel_is_idempotent(self):
        order = _order_in(OrderStatus.CANCELLED)
        stamp = order.updated_at
        assert order.cancel() is False
        assert order.status == OrderStatus.CANCELLED
        assert order.updated_at == stamp

    @pytest.mark.parametrize("status", [OrderStatus.SHIPPED, OrderStatus.DONE])
    def test_terminal_statuses_refuse(self, status):
        order = _order_in(status)
        with pytest.raises(InvalidStateError, match="cannot cancel"):
            order.cancel()
        assert order.status == status

    def test_cancel_keeps_items_and_total(self):
        order = Order.create(ALICE, [_make_item(qty=3, price="7")])
        order.cancel()
        assert order.total == Money.of("21")
        assert order.items[0].quantity == Quantity(3)


class TestOrderSetStatus:

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_any_status_from_pending(self, target):
        order = _order_in(OrderStatus.PENDING)
        order.set_status(target)
        assert order.status == target

    def test_done_back_to_pending_allowed(self):
        order = _order_in(OrderStatus.DONE)
        order.set_status(OrderStatus.PENDING)
        assert order.status == OrderStatus.PENDING

    def test_stamps_updated_at(self):
        order = _order_in(OrderStatus.PENDING)
        order.updated_at = None
        order.set_status(OrderStatus.PAID)
        assert order.updated_at is not None


class TestOrderStatusParse:

    def test_known_value(self):
        assert OrderStatus.parse("shipped") is OrderStatus.SHIPPED

    def test_unknown_value_rejected(self):
        with pytest.raises(ValidationError, match="invalid status"):
            OrderStatus.parse("lost")

    def test_case_sensitive(self):
        with pytest.raises(ValidationError):
            OrderStatus.parse("PAID")


class TestOrderOwnership:

    def test_owner(self):
        assert Order.create(ALICE, [_make_item()]).is_owned_by(ALICE)

    def test_other_user(self):
        assert not Order.create(ALICE, [_make_item()]).is_owned_by(BOB)

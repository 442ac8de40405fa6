"""Tests for the back-office order operations: set status, delete, list, show."""

from datetime import datetime, timezone

import pytest

from backoffice.application.delete_order import DeleteOrderHandler
from backoffice.application.list_orders import ListOrdersHandler
from backoffice.application.projection import OrderProjector
from backoffice.application.set_order_status import SetOrderStatusHandler
from backoffice.application.show_order import ShowOrderHandler
from backoffice.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.principal import AdminPrincipal, UserPrincipal
from backoffice.domain.model.product import Product
from backoffice.domain.model.user import User
from backoffice.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository, FakeProductRepository, FakeUserRepository

ALICE = f"{1:024x}"
BOB = f"{2:024x}"
WIDGET = f"{101:024x}"
MISSING = f"{199:024x}"


def _setup():
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([
        Product(id=WIDGET, name="Widget", price=Money.of("10")),
    ])
    user_repo = FakeUserRepository([
        User(id=ALICE, name="Alice", email="alice@example.com"),
        User(id=BOB, name="Bob", email="bob@example.com"),
    ])
    return order_repo, product_repo, OrderProjector(product_repo, user_repo)


def _place(order_repo: FakeOrderRepository, user_id: str, qty: int = 1,
           status: OrderStatus = OrderStatus.PENDING, created_at: datetime | None = None) -> str:
    order = Order.create(user_id, [OrderLineItem(WIDGET, Quantity(qty), Money.of("10"))])
    order.status = status
    if created_at is not None:
        order.created_at = created_at
    return order_repo.create(order).id


class TestSetOrderStatus:

    def test_admin_sets_status(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, ALICE)
        dto = SetOrderStatusHandler(order_repo, projector).handle(AdminPrincipal(), order_id, "paid")
        assert dto.status == "paid"
        assert order_repo.find_by_id(order_id).status == OrderStatus.PAID

    def test_admin_can_reopen_done_order(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, ALICE, status=OrderStatus.DONE)
        dto = SetOrderStatusHandler(order_repo, projector).handle(AdminPrincipal(), order_id, "pending")
        assert dto.status == "pending"

    def test_status_change_does_not_touch_items(self):
        order_repo, product_repo, projector = _setup()
        order_id = _place(order_repo, ALICE, qty=3)
        product_repo.get_by_id(WIDGET).update_price(Money.of("50"))
        SetOrderStatusHandler(order_repo, projector).handle(AdminPrincipal(), order_id, "shipped")
        stored = order_repo.find_by_id(order_id)
        assert stored.items[0].unit_price == Money.of("10")
        assert stored.total == Money.of("30")

    def test_unknown_status_rejected(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, ALICE)
        with pytest.raises(ValidationError, match="invalid status"):
            SetOrderStatusHandler(order_repo, projector).handle(AdminPrincipal(), order_id, "lost")
        assert order_repo.find_by_id(order_id).status == OrderStatus.PENDING

    def test_missing_order(self):
        order_repo, _, projector = _setup()
        with pytest.raises(EntityNotFoundError):
            SetOrderStatusHandler(order_repo, projector).handle(AdminPrincipal(), MISSING, "paid")

    def test_shopper_forbidden(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, ALICE)
        with pytest.raises(ForbiddenError):
            SetOrderStatusHandler(order_repo, projector).handle(UserPrincipal(ALICE), order_id, "done")


class TestDeleteOrder:

    def test_admin_deletes_done_order(self):
        order_repo, _, _ = _setup()
        order_id = _place(order_repo, ALICE, status=OrderStatus.DONE)
        DeleteOrderHandler(order_repo).handle(AdminPrincipal(), order_id)
        assert order_repo.find_by_id(order_id) is None

    def test_missing_order(self):
        order_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(order_repo).handle(AdminPrincipal(), MISSING)

    def test_second_delete_reports_not_found(self):
        order_repo, _, _ = _setup()
        order_id = _place(order_repo, ALICE)
        DeleteOrderHandler(order_repo).handle(AdminPrincipal(), order_id)
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(order_repo).handle(AdminPrincipal(), order_id)

    def test_malformed_id(self):
        order_repo, _, _ = _setup()
        with pytest.raises(ValidationError):
            DeleteOrderHandler(order_repo).handle(AdminPrincipal(), "nope")

    def test_shopper_forbidden(self):
        order_repo, _, _ = _setup()
        order_id = _place(order_repo, ALICE)
        with pytest.raises(ForbiddenError):
            DeleteOrderHandler(order_repo).handle(UserPrincipal(ALICE), order_id)
        assert order_repo.find_by_id(order_id) is not None


class TestListOrders:

    def test_shopper_sees_only_own_orders(self):
        order_repo, _, projector = _setup()
        _place(order_repo, ALICE)
        _place(order_repo, BOB)
        _place(order_repo, ALICE)
        orders = ListOrdersHandler(order_repo, projector).list_own(UserPrincipal(ALICE))
        assert len(orders) == 2
        assert {o.user_id for o in orders} == {ALICE}

    def test_newest_first(self):
        order_repo, _, projector = _setup()
        first = _place(order_repo, ALICE, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        second = _place(order_repo, ALICE, created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        orders = ListOrdersHandler(order_repo, projector).list_all(AdminPrincipal())
        assert [o.id for o in orders] == [second, first]

    def test_admin_sees_everything(self):
        order_repo, _, projector = _setup()
        _place(order_repo, ALICE)
        _place(order_repo, BOB)
        orders = ListOrdersHandler(order_repo, projector).list_all(AdminPrincipal())
        assert len(orders) == 2
        assert {o.user.name for o in orders} == {"Alice", "Bob"}

    def test_shopper_cannot_list_all(self):
        order_repo, _, projector = _setup()
        with pytest.raises(ForbiddenError):
            ListOrdersHandler(order_repo, projector).list_all(UserPrincipal(ALICE))

    def test_projection_shows_current_catalog_but_snapshot_price(self):
        order_repo, product_repo, projector = _setup()
        _place(order_repo, ALICE)
        product_repo.get_by_id(WIDGET).update_price(Money.of("12"))
        [dto] = ListOrdersHandler(order_repo, projector).list_own(UserPrincipal(ALICE))
        assert str(dto.items[0].price) == "10"
        assert str(dto.items[0].product.price) == "12"


class TestShowOrder:

    def test_owner_sees_order(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, ALICE)
        dto = ShowOrderHandler(order_repo, projector).handle(UserPrincipal(ALICE), order_id)
        assert dto.id == order_id

    def test_other_shopper_forbidden(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, ALICE)
        with pytest.raises(ForbiddenError):
            ShowOrderHandler(order_repo, projector).handle(UserPrincipal(BOB), order_id)

    def test_admin_sees_any_order(self):
        order_repo, _, projector = _setup()
        order_id = _place(order_repo, BOB)
        dto = ShowOrderHandler(order_repo, projector).handle(AdminPrincipal(), order_id)
        assert dto.user.email == "bob@example.com"

    def test_removed_product_projects_as_none(self):
        order_repo, _, _ = _setup()
        order_id = _place(order_repo, ALICE)
        projector = OrderProjector(FakeProductRepository(), FakeUserRepository())
        dto = ShowOrderHandler(order_repo, projector).handle(AdminPrincipal(), order_id)
        assert dto.items[0].product is None
        assert dto.user is None

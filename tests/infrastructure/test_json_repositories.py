"""Tests for the JSON file repositories, against a temporary data directory."""

import json
import threading
from datetime import datetime, timezone

import pytest

from backoffice.domain.exceptions import StoreError
from backoffice.domain.model.identifiers import is_valid_id
from backoffice.domain.model.order import Order, OrderLineItem, OrderStatus
from backoffice.domain.model.product import Product
from backoffice.domain.model.user import User
from backoffice.domain.model.value_objects import Money, Quantity
from backoffice.infrastructure.persistence.json_order_repository import JsonOrderRepository
from backoffice.infrastructure.persistence.json_product_repository import JsonProductRepository
from backoffice.infrastructure.persistence.json_user_repository import JsonUserRepository

ALICE = f"{1:024x}"
BOB = f"{2:024x}"
WIDGET = f"{101:024x}"
GADGET = f"{102:024x}"
MISSING = f"{199:024x}"


def _order(user_id: str = ALICE, created_at: datetime | None = None) -> Order:
    order = Order.create(user_id, [
        OrderLineItem(WIDGET, Quantity(2), Money.of("10.50")),
        OrderLineItem(GADGET, Quantity(1), Money.of("5")),
    ])
    if created_at is not None:
        order.created_at = created_at
    return order


class TestJsonOrderRepository:

    def test_creates_file_on_first_use(self, tmp_path):
        JsonOrderRepository(tmp_path / "nested" / "orders.json")
        assert json.loads((tmp_path / "nested" / "orders.json").read_text()) == []

    def test_create_assigns_id_and_round_trips(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = repo.create(_order())
        assert is_valid_id(order.id)

        loaded = repo.find_by_id(order.id)
        assert loaded.user_id == ALICE
        assert loaded.status == OrderStatus.PENDING
        assert [i.unit_price for i in loaded.items] == [Money.of("10.50"), Money.of("5")]
        assert loaded.total == Money.of("26.00")
        assert loaded.created_at == order.created_at

    def test_stored_record_shape(self, tmp_path):
        path = tmp_path / "orders.json"
        order = JsonOrderRepository(path).create(_order())
        [raw] = json.loads(path.read_text())
        assert raw["id"] == order.id
        assert raw["userId"] == ALICE
        assert raw["items"][0] == {"productId": WIDGET, "qty": 2, "price": "10.50"}
        assert raw["total"] == "26.00"
        assert raw["status"] == "pending"

    def test_find_by_id_missing(self, tmp_path):
        assert JsonOrderRepository(tmp_path / "orders.json").find_by_id(MISSING) is None

    def test_find_by_user_newest_first(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        older = repo.create(_order(ALICE, datetime(2024, 1, 1, tzinfo=timezone.utc)))
        repo.create(_order(BOB))
        newer = repo.create(_order(ALICE, datetime(2024, 2, 1, tzinfo=timezone.utc)))
        assert [o.id for o in repo.find_by_user(ALICE)] == [newer.id, older.id]
        assert len(repo.find_all()) == 3

    def test_update_status_only_touches_status(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = repo.create(_order())
        updated = repo.update_status(order.id, OrderStatus.SHIPPED)
        assert updated.status == OrderStatus.SHIPPED
        assert updated.updated_at is not None
        assert updated.items == order.items
        assert repo.find_by_id(order.id).status == OrderStatus.SHIPPED

    def test_update_status_missing(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        assert repo.update_status(MISSING, OrderStatus.PAID) is None

    def test_delete(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = repo.create(_order())
        assert repo.delete(order.id) is True
        assert repo.delete(order.id) is False
        assert repo.find_by_id(order.id) is None

    def test_malformed_record_fails_closed(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps([{
            "id": MISSING, "userId": ALICE, "status": "lost",
            "items": [{"productId": WIDGET, "qty": 1, "price": "1"}],
            "createdAt": "2024-01-01T00:00:00+00:00",
        }]))
        with pytest.raises(StoreError, match="Malformed order record"):
            JsonOrderRepository(path).find_by_id(MISSING)

    def test_negative_stored_price_fails_closed(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps([{
            "id": MISSING, "userId": ALICE, "status": "paid",
            "items": [{"productId": WIDGET, "qty": 1, "price": "-1"}],
            "createdAt": "2024-01-01T00:00:00+00:00",
        }]))
        with pytest.raises(StoreError):
            JsonOrderRepository(path).find_all()

    def test_unreadable_file_is_store_error(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("")
        with pytest.raises(StoreError, match="Could not read orders.json"):
            JsonOrderRepository(path).find_all()

    def test_parallel_creates_keep_every_order(self, tmp_path):
        path = tmp_path / "orders.json"
        repo = JsonOrderRepository(path)
        other = JsonOrderRepository(path)
        errors = []

        def place(target):
            try:
                for _ in range(25):
                    target.create(_order())
                    target.find_all()
            except Exception as exc:
                errors.append(exc)

        threads = [
            threading.Thread(target=place, args=(repo if n % 2 else other,))
            for n in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert errors == []
        assert len(repo.find_all()) == 200
        assert [p.name for p in tmp_path.iterdir()] == ["orders.json"]


class TestJsonProductRepository:

    def test_save_and_batch_lookup(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(id=WIDGET, name="Widget", price=Money.of("10"), sku="W-1"))
        repo.save(Product(id=GADGET, name="Gadget", price=Money.of("5"), is_active=False))

        found = repo.find_by_ids([WIDGET, GADGET, MISSING])
        assert set(found) == {WIDGET, GADGET}
        assert found[WIDGET].sku == "W-1"
        assert set(repo.find_active_by_ids([WIDGET, GADGET])) == {WIDGET}

    def test_list_active_only(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(id=WIDGET, name="Widget", price=Money.of("10")))
        repo.save(Product(id=GADGET, name="Gadget", price=Money.of("5"), is_active=False))
        assert [p.id for p in repo.list_all(active_only=True)] == [WIDGET]
        assert len(repo.list_all()) == 2

    def test_save_overwrites(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = Product(id=WIDGET, name="Widget", price=Money.of("10"))
        repo.save(product)
        product.update_price(Money.of("12.25"))
        repo.save(product)
        assert repo.get_by_id(WIDGET).price == Money.of("12.25")
        assert len(repo.list_all()) == 1


class TestJsonUserRepository:

    def test_email_lookup_is_case_insensitive(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(User(id=ALICE, name="Alice", email="alice@example.com"))
        assert repo.get_by_email("ALICE@example.com").id == ALICE
        assert repo.get_by_email("bob@example.com") is None

    def test_exists_and_batch_lookup(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(User(id=ALICE, name="Alice", email="alice@example.com"))
        assert repo.exists(ALICE)
        assert not repo.exists(BOB)
        assert set(repo.find_by_ids([ALICE, BOB])) == {ALICE}

"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The store handle is
created here, once per process, and handed to the repositories.
"""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.application.projection import OrderProjector
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.user_repository import UserRepository
from backoffice.infrastructure.config import Settings
from backoffice.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from backoffice.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from backoffice.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)
from backoffice.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from backoffice.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from backoffice.infrastructure.persistence.mongo_store import MongoStore
from backoffice.infrastructure.persistence.mongo_user_repository import (
    MongoUserRepository,
)


@dataclass(frozen=True)
class Repositories:
    orders: OrderRepository
    products: ProductRepository
    users: UserRepository

    def projector(self) -> OrderProjector:
        return OrderProjector(self.products, self.users)


def json_repositories(settings: Settings) -> Repositories:
    return Repositories(
        orders=JsonOrderRepository(settings.data_dir / "orders.json"),
        products=JsonProductRepository(settings.data_dir / "products.json"),
        users=JsonUserRepository(settings.data_dir / "users.json"),
    )


def mongo_store(settings: Settings) -> MongoStore:
    return MongoStore(
        uri=settings.mongodb_uri,  # type: ignore[arg-type]
        db_name=settings.mongodb_db,
        timeout_ms=settings.mongodb_timeout_ms,
    )


def mongo_repositories(store: MongoStore) -> Repositories:
    return Repositories(
        orders=MongoOrderRepository(store),
        products=MongoProductRepository(store),
        users=MongoUserRepository(store),
    )


def build_repositories(settings: Settings) -> Repositories:
    if settings.store == "mongo":
        return mongo_repositories(mongo_store(settings))
    return json_repositories(settings)

"""HTTP routes for orders (transaksi) and the public catalog."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from backoffice.application.cancel_order import CancelOrderHandler
from backoffice.application.create_order import CreateOrderHandler
from backoffice.application.delete_order import DeleteOrderHandler
from backoffice.application.dto import OrderItemSpec
from backoffice.application.list_orders import ListOrdersHandler
from backoffice.application.set_order_status import SetOrderStatusHandler
from backoffice.infrastructure.bootstrap import Repositories
from backoffice.infrastructure.http.schemas import (
    AdminCreateOrderIn,
    CreateOwnOrderIn,
    OkEnvelope,
    OrderEnvelope,
    OrderItemIn,
    OrderListEnvelope,
    OrderOut,
    ProductListEnvelope,
    ProductOut,
    SetStatusIn,
)
from backoffice.infrastructure.http.security import AdminDep, UserDep


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


ReposDep = Annotated[Repositories, Depends(get_repositories)]

router = APIRouter()


def _specs(items: list[OrderItemIn]) -> list[OrderItemSpec]:
    return [OrderItemSpec(product_id=i.product_id, quantity=i.qty) for i in items]


def _create_handler(repos: Repositories) -> CreateOrderHandler:
    return CreateOrderHandler(
        order_repo=repos.orders,
        product_repo=repos.products,
        user_repo=repos.users,
    )


@router.get("/health")
def health():
    return {"ok": True}


# --- Back office --------------------------------------------------------------


@router.get("/api/transaksi", response_model=OrderListEnvelope)
def list_all_orders(principal: AdminDep, repos: ReposDep):
    orders = ListOrdersHandler(repos.orders, repos.projector()).list_all(principal)
    return OrderListEnvelope(items=[OrderOut.from_dto(o) for o in orders])


@router.post("/api/transaksi", response_model=OrderEnvelope, status_code=201)
def admin_create_order(body: AdminCreateOrderIn, principal: AdminDep, repos: ReposDep):
    dto = _create_handler(repos).handle(principal, body.user_id, _specs(body.items))
    return OrderEnvelope(item=OrderOut.from_dto(dto))


@router.patch("/api/transaksi/{order_id}", response_model=OrderEnvelope)
def set_order_status(order_id: str, body: SetStatusIn, principal: AdminDep, repos: ReposDep):
    handler = SetOrderStatusHandler(repos.orders, repos.projector())
    dto = handler.handle(principal, order_id, body.status)
    return OrderEnvelope(item=OrderOut.from_dto(dto))


@router.delete("/api/transaksi/{order_id}", response_model=OkEnvelope)
def delete_order(order_id: str, principal: AdminDep, repos: ReposDep):
    DeleteOrderHandler(repos.orders).handle(principal, order_id)
    return OkEnvelope()


# --- Shopper self-service -----------------------------------------------------


@router.get("/api/me/transaksi", response_model=OrderListEnvelope)
def list_own_orders(principal: UserDep, repos: ReposDep):
    orders = ListOrdersHandler(repos.orders, repos.projector()).list_own(principal)
    return OrderListEnvelope(items=[OrderOut.from_dto(o) for o in orders])


@router.post("/api/me/transaksi", response_model=OrderEnvelope, status_code=201)
def create_own_order(body: CreateOwnOrderIn, principal: UserDep, repos: ReposDep):
    dto = _create_handler(repos).handle(principal, principal.user_id, _specs(body.items))
    return OrderEnvelope(item=OrderOut.from_dto(dto))


@router.post("/api/me/transaksi/{order_id}/cancel", response_model=OrderEnvelope)
def cancel_own_order(order_id: str, principal: UserDep, repos: ReposDep):
    dto = CancelOrderHandler(repos.orders, repos.projector()).handle(principal, order_id)
    return OrderEnvelope(item=OrderOut.from_dto(dto))


# --- Public catalog -----------------------------------------------------------


@router.get("/api/public/products", response_model=ProductListEnvelope)
def list_public_products(repos: ReposDep, q: str | None = None):
    products = repos.products.list_all(active_only=True)
    if q and q.strip():
        needle = q.strip().lower()
        products = [p for p in products if needle in p.name.lower() or needle in p.sku.lower()]
    return ProductListEnvelope(items=[ProductOut.from_product(p) for p in products])

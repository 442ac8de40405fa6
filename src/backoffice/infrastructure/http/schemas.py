"""Request and response bodies of the HTTP API.

Request models reject unknown fields, so a misspelt key fails the request
instead of being ignored. Response models use the camelCase field names of
the stored documents; amounts are decimal strings.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from backoffice.application.dto import OrderDTO, OrderLineItemDTO, ProductSummaryDTO
from backoffice.domain.model.product import Product


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------


class OrderItemIn(RequestModel):
    product_id: str = Field(alias="productId")
    qty: StrictInt


class AdminCreateOrderIn(RequestModel):
    """Back office order entry on behalf of a shopper."""

    user_id: str = Field(alias="userId")
    items: list[OrderItemIn]


class CreateOwnOrderIn(RequestModel):
    items: list[OrderItemIn]


class SetStatusIn(RequestModel):
    status: str


# --- Responses ----------------------------------------------------------------


class ProductOut(ResponseModel):
    id: str
    name: str
    sku: str
    price: Decimal
    image_url: str
    description: str = ""

    @classmethod
    def from_summary(cls, dto: ProductSummaryDTO) -> ProductOut:
        return cls(id=dto.id, name=dto.name, sku=dto.sku, price=dto.price, image_url=dto.image_url)

    @classmethod
    def from_product(cls, product: Product) -> ProductOut:
        return cls(
            id=product.id,
            name=product.name,
            sku=product.sku,
            price=product.price.amount,
            image_url=product.image_url,
            description=product.description,
        )


class UserOut(ResponseModel):
    id: str
    name: str
    email: str


class OrderItemOut(ResponseModel):
    product_id: str
    qty: int
    price: Decimal
    line_total: Decimal
    product: ProductOut | None = None

    @classmethod
    def from_dto(cls, dto: OrderLineItemDTO) -> OrderItemOut:
        return cls(
            product_id=dto.product_id,
            qty=dto.quantity,
            price=dto.price,
            line_total=dto.line_total,
            product=ProductOut.from_summary(dto.product) if dto.product else None,
        )


class OrderOut(ResponseModel):
    id: str
    user_id: str
    user: UserOut | None = None
    status: str
    items: list[OrderItemOut]
    total: Decimal
    currency: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_dto(cls, dto: OrderDTO) -> OrderOut:
        return cls(
            id=dto.id,
            user_id=dto.user_id,
            user=(
                UserOut(id=dto.user.id, name=dto.user.name, email=dto.user.email)
                if dto.user
                else None
            ),
            status=dto.status,
            items=[OrderItemOut.from_dto(item) for item in dto.items],
            total=dto.total,
            currency=dto.currency,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class OrderEnvelope(BaseModel):
    item: OrderOut


class OrderListEnvelope(BaseModel):
    items: list[OrderOut]


class ProductListEnvelope(BaseModel):
    items: list[ProductOut]


class OkEnvelope(BaseModel):
    ok: bool = True

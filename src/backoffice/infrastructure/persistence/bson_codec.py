"""Conversions between domain primitives and BSON values."""

from __future__ import annotations

from decimal import Decimal

from bson import Decimal128, ObjectId

from backoffice.domain.exceptions import StoreError


def object_id(value: str) -> ObjectId:
    return ObjectId(value)


def decimal128(value: Decimal) -> Decimal128:
    return Decimal128(value)


def read_decimal(value: object) -> Decimal:
    """Read a stored amount; older documents hold plain numbers."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, bool):
        raise StoreError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float, str)):
        return Decimal(str(value))
    raise StoreError(f"Expected a number, got {type(value).__name__}")


def read_id(value: object) -> str:
    if isinstance(value, ObjectId):
        return str(value)
    raise StoreError(f"Expected an ObjectId, got {type(value).__name__}")

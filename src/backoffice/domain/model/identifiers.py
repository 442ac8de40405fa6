"""Entity identifiers.

Every aggregate is keyed by a 24-character hex ObjectId string, whichever
store holds it, so ids minted by the JSON store stay valid in MongoDB.
"""

from __future__ import annotations

from bson import ObjectId


def new_id() -> str:
    return str(ObjectId())


def is_valid_id(value: object) -> bool:
    """True for a 24-char hex string; ObjectId also accepts raw 12-byte ids."""
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)

"""Shared fixtures.

Tests marked ``mongodb`` need a live server and are skipped unless
``MONGODB_URI`` is set. Each such test gets its own throwaway database.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator

import pytest

from backoffice.infrastructure.persistence.mongo_store import MongoStore

MONGODB_URI = os.getenv("MONGODB_URI")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if MONGODB_URI:
        return
    skip = pytest.mark.skip(reason="MONGODB_URI is not set")
    for item in items:
        if "mongodb" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def mongo_store() -> Iterator[MongoStore]:
    db_name = f"backoffice_test_{uuid.uuid4().hex[:12]}"
    store = MongoStore(MONGODB_URI, db_name, timeout_ms=3000)  # type: ignore[arg-type]
    try:
        yield store
    finally:
        store.database().client.drop_database(db_name)
        store.close()

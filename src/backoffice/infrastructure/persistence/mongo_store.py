"""Connect-once handle on the MongoDB database.

``MongoStore`` opens the client lazily on first use. Concurrent first
callers share one in-flight connection attempt: the first caller
connects, the others wait on the same future. A failed attempt is not
remembered, so the next caller tries again.
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from backoffice.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]


class MongoStore:

    def __init__(
        self,
        uri: str,
        db_name: str,
        timeout_ms: int = 5000,
        client_factory: ClientFactory = MongoClient,
    ) -> None:
        self._uri = uri
        self._db_name = db_name
        self._timeout_ms = timeout_ms
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._pending: Future | None = None
        self._client: Any = None

    def database(self) -> Database:
        with self._lock:
            future = self._pending
            owner = future is None
            if owner:
                future = self._pending = Future()
        if owner:
            self._connect(future)
        return future.result()

    def collection(self, name: str) -> Collection:
        return self.database()[name]

    def close(self) -> None:
        with self._lock:
            client, self._client, self._pending = self._client, None, None
        if client is not None:
            client.close()

    def _connect(self, future: Future) -> None:
        client = None
        try:
            client = self._client_factory(
                self._uri,
                tz_aware=True,
                serverSelectionTimeoutMS=self._timeout_ms,
            )
            client.admin.command("ping")
        except BaseException as exc:
            with self._lock:
                self._pending = None
            if client is not None:
                client.close()
            logger.error("mongodb connection failed", extra={"db": self._db_name})
            if not isinstance(exc, Exception):
                future.set_exception(exc)
                raise
            error = StoreError(f"Could not connect to MongoDB: {exc}")
            error.__cause__ = exc
            future.set_exception(error)
            return
        self._client = client
        logger.info("mongodb connected", extra={"db": self._db_name})
        future.set_result(client[self._db_name])


def translate_errors(func):
    """Re-raise driver failures as StoreError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (PyMongoError, BSONError, OverflowError) as exc:
            raise StoreError(f"{func.__name__} failed: {exc}") from exc

    return wrapper

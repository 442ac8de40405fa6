"""JSON logging for the ``backoffice`` logger tree.

Every module logs through ``logging.getLogger(__name__)``; this module
installs one JSON handler on the package logger. A filter stamps each
record with the current request id so log lines from one HTTP request
can be correlated (``-`` outside a request, e.g. in the CLI).
"""

from __future__ import annotations

import contextvars
import logging

from pythonjsonlogger import jsonlogger

REQUEST_ID_CTX: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"


class RequestIdFilter(logging.Filter):
    """Attach a ``request_id`` attribute to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = REQUEST_ID_CTX.get()
        return True


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install the JSON handler once and set the package log level."""
    logger = logging.getLogger("backoffice")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger

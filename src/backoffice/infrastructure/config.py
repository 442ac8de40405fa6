"""Runtime settings read from the environment.

Only the composition root (``bootstrap``) and the entry points read
settings; everything below them receives already-built collaborators.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

STORES = ("json", "mongo")


class ConfigError(Exception):
    """Settings are missing or inconsistent."""


@dataclass(frozen=True)
class Settings:
    store: str = "json"
    data_dir: Path = field(default=_DEFAULT_DATA_DIR)
    mongodb_uri: str | None = None
    mongodb_db: str = "backoffice"
    mongodb_timeout_ms: int = 5000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        store = env.get("BACKOFFICE_STORE", "json").strip().lower()
        if store not in STORES:
            raise ConfigError(f"BACKOFFICE_STORE must be one of {STORES}, got {store!r}")

        mongodb_uri = env.get("MONGODB_URI") or None
        if store == "mongo" and not mongodb_uri:
            raise ConfigError("Please define the MONGODB_URI environment variable")

        timeout = env.get("MONGODB_TIMEOUT_MS", "5000")
        try:
            timeout_ms = int(timeout)
        except ValueError:
            raise ConfigError(f"MONGODB_TIMEOUT_MS must be an integer, got {timeout!r}") from None

        log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown LOG_LEVEL {log_level!r}")

        data_dir = env.get("BACKOFFICE_DATA_DIR")
        return cls(
            store=store,
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            mongodb_uri=mongodb_uri,
            mongodb_db=env.get("MONGODB_DB", "backoffice"),
            mongodb_timeout_ms=timeout_ms,
            log_level=log_level,
        )

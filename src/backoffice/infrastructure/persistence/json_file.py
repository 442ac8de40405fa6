"""Shared file access for the JSON repositories.

Each data file has one process-wide lock; repositories hold it across a
whole read-modify-write. Writes go to a temporary file in the same
directory and are moved into place with ``os.replace``, so readers only
ever see a complete document.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
import threading
from pathlib import Path

from backoffice.domain.exceptions import StoreError

_LOCKS: dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = threading.RLock()
        return lock


def read_records(path: Path) -> list[dict]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise StoreError(f"Could not read {path.name}: {exc}") from exc


def write_records(path: Path, records: list[dict]) -> None:
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(records, indent=2) + "\n")
            os.replace(tmp_name, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        raise StoreError(f"Could not write {path.name}: {exc}") from exc


def ensure_file(path: Path) -> None:
    with lock_for(path):
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            write_records(path, [])

"""
cursor_store.py — Rotation Cursor Store

The cursor is the only shared mutable state: one integer under
CURSOR_KEY ("currentDoctorIndex") giving the offset of the next doctor
in the rotation sequence. Default 0 when absent.

Stores expose get/set with upsert semantics plus fetch_and_advance(),
a single read-wrap-increment-write step done under the store's lock.

  MemoryCursorStore: dict-backed, for tests and embedding callers
  JsonCursorStore:   durable JSON file (config/cursor_state.json)
"""

import json
import logging
import os
import tempfile
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from clinic_rotation.config import CURSOR_KEY, CURSOR_METADATA_KEYS, DEFAULT_CURSOR_PATH

logger = logging.getLogger(__name__)

# One lock per cursor file, shared by every JsonCursorStore on that path
_FILE_LOCKS: Dict[Path, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for_path(path: Path) -> threading.Lock:
    key = path.resolve()
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(key)
        if lock is None:
            lock = _FILE_LOCKS[key] = threading.Lock()
    return lock


class CursorStore:
    """Key/value counter store. Subclasses implement _load/_save."""

    def __init__(self):
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _save(self, data: Dict[str, Any]) -> None:
        raise NotImplementedError

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def fetch_and_advance(self, key: str, modulus: int) -> int:
        """
        Return the current index wrapped into [0, modulus) and store the
        next one, as one step under the store lock.
        """
        if modulus <= 0:
            raise ValueError(f"modulus must be positive, got {modulus}")
        with self._lock:
            data = self._load()
            current = _as_index(data.get(key, 0), key)
            index = current % modulus
            data[key] = (index + 1) % modulus
            self._save(data)
        return index


class MemoryCursorStore(CursorStore):
    """In-process store. Contents are lost with the process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._data: Dict[str, Any] = dict(initial or {})

    def _load(self) -> Dict[str, Any]:
        return dict(self._data)

    def _save(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)


class JsonCursorStore(CursorStore):
    """
    Durable store in a JSON object file.

    File format (same layout as other cursor-state files):
      {"currentDoctorIndex": 3, "last_updated": "2026-10-19"}

    Writes go to a temp file in the same directory and are moved into
    place with os.replace, so readers never see a partial file. All stores
    opened on the same path in this process share one lock.
    """

    def __init__(self, path: Optional[Path] = None):
        super().__init__()
        self.path = Path(path) if path is not None else DEFAULT_CURSOR_PATH
        self._lock = _lock_for_path(self.path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Cursor state {self.path} must hold a JSON object")
        return {k: v for k, v in data.items() if k not in CURSOR_METADATA_KEYS}

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = dict(data)
        payload["last_updated"] = date.today().isoformat()

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(f"Cursor state saved to {self.path}: {payload}")


# ---------------------------------------------------------------------------
# Cursor accessors
# ---------------------------------------------------------------------------

def _as_index(value: Any, key: str = CURSOR_KEY) -> int:
    index = int(value)
    if index < 0:
        logger.warning(f"Stored {key}={index} is negative; reading as 0")
        return 0
    return index


def read_cursor(store: CursorStore) -> int:
    """Current rotation offset; 0 when nothing has been stored yet."""
    return _as_index(store.get(CURSOR_KEY, 0))


def write_cursor(store: CursorStore, value: int) -> None:
    """Upsert the rotation offset. Range is the caller's concern."""
    store.set(CURSOR_KEY, int(value))
    logger.info(f"{CURSOR_KEY} set to {int(value)}")

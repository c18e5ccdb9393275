"""
Persisted key-value store.

String keys map to string values, mirroring the device storage the mobile
client used. The whole map lives in a single JSON file; blocking file work
runs in a thread so the event loop is never stalled.
"""

import json
import os
import asyncio
import logging
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from codetutor.core.config import settings

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the backing file cannot be read or written."""


class KeyValueStore:
    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self._lock = threading.Lock()

    # ── Raw file access (worker thread) ──────────────────────────────────────

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self.path} is corrupt: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not hold an object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def _get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def _set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def _remove(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)

    # ── Async API ────────────────────────────────────────────────────────────

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be strings, got {type(value).__name__}")
        await asyncio.to_thread(self._set, key, value)
        logger.debug(f"[STORAGE] set {key}")

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)
        logger.debug(f"[STORAGE] removed {key}")

    async def get_json(self, key: str) -> Any:
        """Return the decoded JSON value under key, or None when unset."""
        raw = await self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Value under '{key}' is not valid JSON: {e}") from e

    async def set_json(self, key: str, value: Any) -> None:
        await self.set_item(key, json.dumps(value, ensure_ascii=False))


_default_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """Process-wide store at STORAGE_PATH (FastAPI dependency)."""
    global _default_store
    if _default_store is None or _default_store.path != Path(settings.STORAGE_PATH):
        _default_store = KeyValueStore(settings.STORAGE_PATH)
        logger.info(f"[STORAGE] Using {_default_store.path}")
    return _default_store

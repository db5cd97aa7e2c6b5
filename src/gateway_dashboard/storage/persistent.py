"""
Module: persistent.py
Description: Client-local key/value persistence.

Provides the durable key/value store backing the webhook history and
the page size preference. Values are strings, as in a browser's local
storage; callers serialize their own data.

Key Components:
- PersistentStore: Protocol every backend implements
- PersistenceFailure: Raised for read, write, serialization and quota errors
- JsonFileStore: Single-file JSON backend with atomic replace and a size quota
- MemoryStore: Volatile backend for tests and ephemeral runs

Dependencies: json, os, pathlib, tempfile, typing
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class PersistenceFailure(Exception):
    """A persistent store operation could not be completed."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class PersistentStore(Protocol):
    """Durable string key/value storage."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryStore:
    """
    In-memory key/value store.

    Honors an optional quota so capacity failures can be exercised
    without touching the filesystem.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise PersistenceFailure("value must be a string", key=key)
        candidate = dict(self._data)
        candidate[key] = value
        _check_quota(candidate, self.quota_bytes, key)
        self._data = candidate

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore:
    """
    File-backed key/value store.

    The whole store is one JSON object mapping keys to string values.
    Every write serializes the full object to a temporary file in the
    same directory and atomically renames it over the previous file.

    Attributes:
        path: Location of the store file
        quota_bytes: Maximum serialized size, None for unlimited

    Example:
        >>> store = JsonFileStore(".dashboard/storage.json")
        >>> store.set("webhook_page_size", "50")
        >>> store.get("webhook_page_size")
        '50'
    """

    def __init__(self, path: str, quota_bytes: Optional[int] = None):
        """
        Initialize the file store.

        Args:
            path: Path of the JSON store file (created on first write)
            quota_bytes: Optional maximum serialized size in bytes

        Raises:
            ValueError: If path is empty or quota is not positive
        """
        if not path or not isinstance(path, str):
            raise ValueError("path must be a non-empty string")
        if quota_bytes is not None and quota_bytes <= 0:
            raise ValueError("quota_bytes must be positive")

        self.path = Path(path)
        self.quota_bytes = quota_bytes

        logger.info(
            "Local store initialized",
            path=str(self.path),
            quota_bytes=quota_bytes
        )

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise PersistenceFailure("value must be a string", key=key)
        data = self._read()
        data[key] = value
        self._write(data, key)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data, key)

    def clear(self) -> None:
        self._write({}, None)

    def _read(self) -> Dict[str, str]:
        """Load the store object; a missing file is an empty store."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise PersistenceFailure(f"Failed to read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PersistenceFailure(f"Corrupt store file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceFailure(f"Corrupt store file {self.path}: not an object")
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str], key: Optional[str]) -> None:
        encoded = _check_quota(data, self.quota_bytes, key)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(encoded)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceFailure(f"Failed to write {self.path}: {e}", key=key) from e


def _check_quota(data: Dict[str, str], quota_bytes: Optional[int], key: Optional[str]) -> str:
    """Serialize the store object and enforce the size quota."""
    try:
        encoded = json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PersistenceFailure(f"Failed to serialize store: {e}", key=key) from e

    if quota_bytes is not None and len(encoded.encode("utf-8")) > quota_bytes:
        raise PersistenceFailure(
            f"Storage quota of {quota_bytes} bytes exceeded",
            key=key
        )
    return encoded

"""
Key-Value Storage Backends

The report store persists its whole collection as one string value under one
key. Anything offering get/set/remove over string keys and values can back
it.

Architecture:
    KeyValueStorage (Protocol)
    ├── InMemoryKeyValueStorage  → dict-backed, optional byte quota
    └── JsonFileKeyValueStorage  → one file per key in a directory

Usage:
    from emergency_mind.storage.backends import JsonFileKeyValueStorage

    storage = JsonFileKeyValueStorage(".emergency_mind")
    storage.set("emergency-mind-reports", "[]")

Author: Emergency-Mind Team
Date: October 2026
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable
from urllib.parse import quote

from loguru import logger

from emergency_mind.core.exceptions import StorageQuotaExceededError, StorageWriteError


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


# =============================================================================
# STAGE 1: STORAGE PROTOCOL (INTERFACE)
# =============================================================================


@runtime_checkable
class KeyValueStorage(Protocol):
    """
    Protocol defining a string key-value medium.

    Required Methods:
        get(key)        → stored value or None
        set(key, value) → replace the value; raises PersistenceError on rejection
        remove(key)     → delete the key; missing keys are not an error
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


# =============================================================================
# STAGE 2: IN-MEMORY BACKEND
# =============================================================================


class InMemoryKeyValueStorage:
    """
    Dict-backed storage with an optional capacity.

    What it does:
        Keeps values in process memory. When a quota is set, a write that
        would push the total size (keys plus values, UTF-8) past it is
        rejected and the previous value is left in place, the way browser
        local storage behaves when full.

    Example:
        >>> storage = InMemoryKeyValueStorage(quota_bytes=1024)
        >>> storage.set("k", "v")
        >>> storage.get("k")
        'v'
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            required = self._size_without(key) + _entry_size(key, value)
            if required > self._quota_bytes:
                raise StorageQuotaExceededError(key, self._quota_bytes, required)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    @property
    def used_bytes(self) -> int:
        """Current total size of all entries."""
        return sum(_entry_size(k, v) for k, v in self._data.items())

    def _size_without(self, key: str) -> int:
        return sum(_entry_size(k, v) for k, v in self._data.items() if k != key)


# =============================================================================
# STAGE 3: JSON FILE BACKEND
# =============================================================================


class JsonFileKeyValueStorage:
    """
    Storage with one file per key in a directory.

    What it does:
        Maps each key to "<quoted-key>.json" and writes values atomically:
        the new value goes to a temporary file in the same directory, which
        then replaces the target with os.replace. A reader sees either the
        old value or the new one, never a partial write.

    How it works:
        STAGE 3.1: Create the directory on first use
        STAGE 3.2: Check the quota against the other keys' file sizes
        STAGE 3.3: Write temp file, fsync, replace

    Example:
        >>> storage = JsonFileKeyValueStorage("/tmp/em-store")
        >>> storage.set("emergency-mind-reports", "[]")
        >>> storage.path_for("emergency-mind-reports").name
        'emergency-mind-reports.json'
    """

    SUFFIX = ".json"

    def __init__(self, directory: str, quota_bytes: Optional[int] = None):
        """
        Args:
            directory: Directory holding one file per key
            quota_bytes: Total capacity across all keys (None = unlimited)
        """
        self._directory = Path(directory)
        self._quota_bytes = quota_bytes

        logger.debug(f"JsonFileKeyValueStorage initialized | Directory: {self._directory}")

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File that holds the value for `key`."""
        return self._directory / f"{quote(key, safe='-_.')}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        encoded = value.encode("utf-8")

        # -----------------------------------------------------------------
        # 3.1-3.2: Directory and quota
        # -----------------------------------------------------------------
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(key, str(e)) from e

        if self._quota_bytes is not None:
            required = self._size_without(path) + len(encoded)
            if required > self._quota_bytes:
                raise StorageQuotaExceededError(key, self._quota_bytes, required)

        # -----------------------------------------------------------------
        # 3.3: Atomic write
        # -----------------------------------------------------------------
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".tmp-", suffix=self.SUFFIX)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(encoded)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(key, str(e)) from e

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageWriteError(key, str(e)) from e

    def _size_without(self, path: Path) -> int:
        total = 0
        for entry in self._directory.glob(f"*{self.SUFFIX}"):
            if entry.name.startswith(".tmp-") or entry == path:
                continue
            total += entry.stat().st_size
        return total

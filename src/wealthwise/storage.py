"""Key-value persistence substrate for WealthWise.

The transaction store only needs three operations on opaque byte values:

- ``get(key) -> bytes | None``
- ``set(key, value)``
- ``delete(key)``

Two backends are provided:

- ``memory``: a process-local dict, shared per namespace so that several
  store objects built from the same config see the same data (tests, demos).
- ``file``: one file per key under a directory, the local-first equivalent
  of browser storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from .config import Config

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Base error for all storage-related failures."""


class StorageConfigError(StorageError):
    """Raised when the storage backend is unknown or misconfigured."""


class KeyValueStore:
    """Interface for byte-valued key-value backends."""

    def get(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def set(self, key: str, value: bytes) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Simple in-process store used for tests and lightweight demos."""

    data: Dict[str, bytes] = field(default_factory=dict)

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """Stores each key as a file under ``root``, named by the percent-encoded key."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path_for(self, key: str) -> Path:
        name = quote(key, safe="")
        if not name or name in {".", ".."}:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.root / name

    def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete value.
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(value)
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


# Global registry for in-memory stores keyed by namespace (storage.path).
_IN_MEMORY_STORES: Dict[str, InMemoryKeyValueStore] = {}


def build_key_value_store(config: Config) -> KeyValueStore:
    """Return the backend selected by ``config.storage.backend``.

    Raises:
        StorageConfigError: If the backend name is not supported.
    """
    backend = (config.storage.backend or "").strip().lower()

    if backend == "memory":
        namespace = config.storage.path.as_posix()
        store = _IN_MEMORY_STORES.get(namespace)
        if store is None:
            store = InMemoryKeyValueStore()
            _IN_MEMORY_STORES[namespace] = store
        logger.debug("WW STORAGE: using in-memory backend (namespace=%s)", namespace)
        return store

    if backend == "file":
        logger.debug("WW STORAGE: using file backend at %s", config.storage.path)
        return FileKeyValueStore(config.storage.path)

    raise StorageConfigError(
        f"Unsupported storage backend '{config.storage.backend}'. "
        "Expected one of: 'file', 'memory'."
    )

"""Key-value namespaces for reciper.

Provides file, SQLite and in-memory backends behind one small interface.
"""

from typing import Optional

from ..profile import Profile
from .db import SQLiteKeyValueStore
from .keyvalue import KeyValueStore, MemoryKeyValueStore, validate_key
from .vault import VaultKeyValueStore

APP_NAME = "recipes"

BACKENDS = ("vault", "sqlite", "memory")


def open_namespace(profile: Optional[Profile] = None, backend: Optional[str] = None) -> KeyValueStore:
    """Open the namespace named by backend (or the profile's configured one)."""
    profile = profile or Profile.current()
    backend = (backend or profile.storage_backend).lower()

    if backend == "vault":
        return VaultKeyValueStore.for_app(APP_NAME, profile)
    if backend == "sqlite":
        return SQLiteKeyValueStore.for_app(APP_NAME, profile)
    if backend == "memory":
        return MemoryKeyValueStore()
    raise ValueError(f"Unknown storage backend: {backend!r}. Expected one of {', '.join(BACKENDS)}")


__all__ = [
    "APP_NAME",
    "BACKENDS",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "VaultKeyValueStore",
    "open_namespace",
    "validate_key",
]

"""Key-value namespace interface and the in-memory implementation."""

import re
from typing import Dict, List, Optional, Protocol, runtime_checkable

_KEY_PATTERN = re.compile(r'^[A-Za-z0-9_][A-Za-z0-9_.-]*$')


def validate_key(key: str) -> str:
    """Reject keys that cannot double as a plain file name."""
    if not isinstance(key, str) or not _KEY_PATTERN.match(key) or key.endswith(".tmp"):
        raise ValueError(f"Invalid key: {key!r}. Must match [A-Za-z0-9_][A-Za-z0-9_.-]*")
    return key


@runtime_checkable
class KeyValueStore(Protocol):
    """A flat namespace mapping string keys to byte values."""

    def get(self, key: str) -> Optional[bytes]:
        """Return the value under key, or None when absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Overwrite the value under key."""
        ...

    def remove(self, key: str) -> bool:
        """Delete key, returning whether it existed."""
        ...

    def keys(self) -> List[str]:
        """List stored keys in sorted order."""
        ...


class MemoryKeyValueStore:
    """Dict-backed namespace; nothing outlives the process."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(validate_key(key))

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError("Values must be bytes")
        self._data[validate_key(key)] = bytes(value)

    def remove(self, key: str) -> bool:
        return self._data.pop(validate_key(key), None) is not None

    def keys(self) -> List[str]:
        return sorted(self._data)

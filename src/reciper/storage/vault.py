import os
from pathlib import Path
from typing import List, Optional

from ..errors import StorageError
from ..logger import get_logger
from ..profile import Profile
from .keyvalue import validate_key

logger = get_logger("vault")


class VaultKeyValueStore:
    """File-backed key-value namespace for a specific app.

    - Each key is one file under ``<vault_root>/<app_name>/``; values are opaque
      bytes and are never interpreted here.
    - Keys are validated so they cannot escape the app directory.
    - Writes land in a sibling ``.tmp`` file first and are moved into place with
      ``os.replace``, so a reader sees either the old value or the new one.
    """

    def __init__(self, app_name: str, vault_root: Path):
        self.app_name = app_name
        self.vault_root = Path(vault_root)
        self.app_root = self.vault_root / app_name

        # Create app directory if needed
        self.app_root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def for_app(cls, app_name: str, profile: Optional[Profile] = None) -> "VaultKeyValueStore":
        """Get a namespace for an app inside the profile's vault."""
        profile = profile or Profile.current()
        return cls(app_name, profile.vault_root)

    def _validate_path(self, key: str) -> Path:
        """Validate a key and resolve it within the app's directory."""
        validate_key(key)

        # Check for path traversal attempts
        try:
            full_path = (self.app_root / key).resolve()
            full_path.relative_to(self.app_root.resolve())
        except (ValueError, RuntimeError):
            raise ValueError(f"Invalid key: {key}")

        return full_path

    def get(self, key: str) -> Optional[bytes]:
        """Read the value stored under key, or None if it was never written."""
        full_path = self._validate_path(key)
        if not full_path.exists():
            return None

        try:
            return full_path.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read {key} from vault '{self.app_name}': {e}") from e

    def set(self, key: str, value: bytes) -> None:
        """Overwrite the value stored under key."""
        if not isinstance(value, (bytes, bytearray)):
            raise ValueError("Values must be bytes")

        full_path = self._validate_path(key)
        tmp_path = full_path.with_name(full_path.name + ".tmp")

        try:
            tmp_path.write_bytes(bytes(value))
            os.replace(tmp_path, full_path)
        except OSError as e:
            raise StorageError(f"Failed to write {key} to vault '{self.app_name}': {e}") from e

        logger.debug(f"Wrote {len(value)} bytes to {self.app_name}/{key}")

    def remove(self, key: str) -> bool:
        """Delete a key, returning whether it existed."""
        full_path = self._validate_path(key)
        if not full_path.exists():
            return False

        try:
            full_path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {key} from vault '{self.app_name}': {e}") from e
        return True

    def keys(self) -> List[str]:
        """List keys stored in this namespace."""
        if not self.app_root.exists():
            return []

        return sorted(
            item.name
            for item in self.app_root.iterdir()
            if item.is_file() and not item.name.endswith(".tmp")
        )

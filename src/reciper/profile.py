"""Profile management for reciper storage and configuration."""

import os
from pathlib import Path
from typing import Optional


class Profile:
    """Manages profile-specific paths for reciper storage.

    A profile determines where reciper stores its recipe namespace and logs.
    The active profile is determined by the RECIPER_PROFILE environment variable,
    defaulting to "default" if not set. RECIPER_DATA_DIR relocates the whole
    data root, which is how tests and embedders keep state out of the checkout.
    """

    def __init__(self, name: Optional[str] = None, data_root: Optional[Path] = None):
        """Initialize profile with given name or from environment.

        Args:
            name: Profile name. If None, uses RECIPER_PROFILE env var or "default".
            data_root: Explicit data directory. If None, uses RECIPER_DATA_DIR
                or ``<project root>/data/<name>``.
        """
        self.name = name or os.getenv("RECIPER_PROFILE", "default")
        if data_root is None:
            env_root = os.getenv("RECIPER_DATA_DIR")
            data_root = Path(env_root) if env_root else self._find_project_root() / "data" / self.name
        self._data_root = Path(data_root)

        self._ensure_directories()

    def _find_project_root(self) -> Path:
        """Find project root by looking for pyproject.toml or .git."""
        current = Path(__file__).resolve().parent

        while current != current.parent:
            if (current / "pyproject.toml").exists() or (current / ".git").exists():
                return current
            current = current.parent

        # Installed outside a checkout
        return Path.home() / ".reciper"

    def _ensure_directories(self) -> None:
        """Create profile directories if they don't exist."""
        self.data_root.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.vault_root.mkdir(parents=True, exist_ok=True)

    @property
    def data_root(self) -> Path:
        """Root directory for profile data."""
        return self._data_root

    @property
    def vault_root(self) -> Path:
        """Root directory for file-backed namespaces."""
        return self._data_root / "vault"

    @property
    def db_path(self) -> Path:
        """Path to the SQLite namespace database."""
        return self._data_root / "reciper.db"

    @property
    def logs_dir(self) -> Path:
        """Directory for log files."""
        return self._data_root / "logs"

    @property
    def log_file(self) -> Path:
        """Path to the main reciper log file."""
        return self.logs_dir / "reciper.log"

    @property
    def storage_backend(self) -> str:
        """Name of the key-value backend holding the collection."""
        return os.getenv("RECIPER_STORAGE", "vault")

    @property
    def log_level(self) -> str:
        """Level for the file log sink."""
        return os.getenv("RECIPER_LOG_LEVEL", "INFO").upper()

    @classmethod
    def current(cls) -> "Profile":
        """Get the current active profile.

        Returns:
            Profile instance for the current profile.
        """
        return cls()

    def __str__(self) -> str:
        """String representation of profile."""
        return f"Profile({self.name})"

    def __repr__(self) -> str:
        """Developer representation of profile."""
        return f"Profile(name={self.name!r}, data_root={self._data_root!s})"

"""Runtime context management for reciper.

Provides a lightweight dependency injection container so the CLI shares one
profile, namespace, store and book without module-level singletons. The CLI
builds a default context; tests construct their own and inject it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Optional

from .book import RecipeBook
from .profile import Profile
from .storage import KeyValueStore, open_namespace
from .store import RecipeStore


@dataclass
class RuntimeContext:
    """Aggregates the services one session needs."""

    profile: Profile = field(default_factory=Profile.current)
    namespace: Optional[KeyValueStore] = None
    _store: RecipeStore | None = field(default=None, init=False, repr=False)
    _book: RecipeBook | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.namespace is None:
            self.namespace = open_namespace(self.profile)

    @property
    def store(self) -> RecipeStore:
        if self._store is None:
            self._store = RecipeStore(self.namespace)
        return self._store

    @property
    def book(self) -> RecipeBook:
        """The collection, loaded from the store on first access."""
        if self._book is None:
            self._book = RecipeBook.open(self.store)
        return self._book


_runtime_lock = RLock()
_runtime_context: Optional[RuntimeContext] = None


def set_runtime_context(context: Optional[RuntimeContext]) -> None:
    """Replace the process-wide runtime context."""

    global _runtime_context
    with _runtime_lock:
        _runtime_context = context


def get_runtime_context() -> RuntimeContext:
    """Return the active runtime context, creating a default if missing."""

    global _runtime_context
    with _runtime_lock:
        if _runtime_context is None:
            _runtime_context = RuntimeContext()
        return _runtime_context

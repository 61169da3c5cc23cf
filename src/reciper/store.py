"""Persistence of the recipe collection in a key-value namespace."""

from typing import Iterable, List, Optional

from .errors import DecodeError, EncodeError, ReciperError, StorageError
from .logger import get_logger
from .models import Recipe, decode_recipes, encode_recipes
from .storage import KeyValueStore

logger = get_logger("store")

STORAGE_KEY = "SavedRecipes"


class RecipeStore:
    """Load and save the whole collection as one document under a fixed key.

    Failures never reach the caller: a corrupt or unreadable document loads
    as an empty collection and a failed write is dropped. Both are logged and
    kept on ``last_error`` so a front end can show a non-blocking notice.
    """

    def __init__(self, namespace: KeyValueStore, key: str = STORAGE_KEY):
        self.namespace = namespace
        self.key = key
        self.last_error: Optional[ReciperError] = None

    def load(self) -> List[Recipe]:
        """Read the saved collection, or an empty list if there is none."""
        try:
            raw = self.namespace.get(self.key)
            if raw is None:
                self.last_error = None
                return []
            recipes = decode_recipes(raw)
        except (DecodeError, StorageError) as e:
            logger.error(f"Failed to load recipes from {self.key}: {e}")
            self.last_error = e
            return []

        self.last_error = None
        logger.debug(f"Loaded {len(recipes)} recipes from {self.key}")
        return recipes

    def save(self, recipes: Iterable[Recipe]) -> bool:
        """Overwrite the saved collection with recipes.

        Returns:
            True if the namespace was written, False if the write was dropped.
        """
        recipes = list(recipes)
        try:
            raw = encode_recipes(recipes)
            self.namespace.set(self.key, raw)
        except (EncodeError, StorageError) as e:
            logger.error(f"Failed to save recipes to {self.key}: {e}")
            self.last_error = e
            return False

        self.last_error = None
        logger.info(f"Saved {len(recipes)} recipes to {self.key}")
        return True

    def clear(self) -> bool:
        """Forget the saved collection."""
        removed = self.namespace.remove(self.key)
        if removed:
            logger.info(f"Cleared {self.key}")
        return removed

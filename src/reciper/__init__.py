"""Reciper - a personal recipe collection with local persistence."""

from .book import RecipeBook
from .errors import DecodeError, EncodeError, ReciperError, StorageError
from .models import SUGGESTED_CATEGORIES, Recipe, decode_recipes, encode_recipes
from .profile import Profile
from .runtime import RuntimeContext, get_runtime_context, set_runtime_context
from .store import STORAGE_KEY, RecipeStore
from .views import (
    ALL_CATEGORIES,
    category_index,
    filter_by_category,
    search,
    visible_recipes,
)

__version__ = "0.1.0"

__all__ = [
    # Model
    "Recipe",
    "SUGGESTED_CATEGORIES",
    "encode_recipes",
    "decode_recipes",

    # Persistence
    "RecipeStore",
    "STORAGE_KEY",
    "RecipeBook",

    # Views
    "ALL_CATEGORIES",
    "category_index",
    "filter_by_category",
    "search",
    "visible_recipes",

    # Errors
    "ReciperError",
    "DecodeError",
    "EncodeError",
    "StorageError",

    # Runtime context
    "Profile",
    "RuntimeContext",
    "get_runtime_context",
    "set_runtime_context",
]

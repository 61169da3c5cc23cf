"""Derived views over the in-memory collection.

Nothing here is persisted. Every function takes a sequence of recipes and
returns a new list in the original order.
"""

from typing import Iterable, List, Sequence

from .models import Recipe

# Category token meaning "no filter"
ALL_CATEGORIES = "All"

# Sorted after everything else in the category index
OTHER_CATEGORY = "Other"


def filter_by_category(recipes: Iterable[Recipe], category: str = ALL_CATEGORIES) -> List[Recipe]:
    """Keep recipes whose category equals the token exactly."""
    if category == ALL_CATEGORIES:
        return list(recipes)
    return [recipe for recipe in recipes if recipe.category == category]


def category_index(recipes: Iterable[Recipe]) -> List[str]:
    """Distinct categories plus "All", sorted, with "Other" moved last."""
    categories = {recipe.category for recipe in recipes}
    categories.add(ALL_CATEGORIES)

    ordered = sorted(categories)
    if OTHER_CATEGORY in categories:
        ordered.remove(OTHER_CATEGORY)
        ordered.append(OTHER_CATEGORY)
    return ordered


def matches(recipe: Recipe, query: str) -> bool:
    """Case-insensitive substring match on name or joined ingredients."""
    needle = query.casefold()
    if needle in recipe.name.casefold():
        return True
    return needle in " ".join(recipe.ingredients).casefold()


def search(recipes: Iterable[Recipe], query: str = "") -> List[Recipe]:
    if not query:
        return list(recipes)
    return [recipe for recipe in recipes if matches(recipe, query)]


def favorites(recipes: Iterable[Recipe]) -> List[Recipe]:
    return [recipe for recipe in recipes if recipe.is_favorite]


def visible_recipes(
    recipes: Sequence[Recipe],
    category: str = ALL_CATEGORIES,
    query: str = "",
) -> List[Recipe]:
    """Apply the category filter, then search within what it kept."""
    return search(filter_by_category(recipes, category), query)

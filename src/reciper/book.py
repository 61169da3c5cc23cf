"""The session-owned recipe collection."""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .logger import get_logger
from .models import Recipe
from .store import RecipeStore
from .views import ALL_CATEGORIES, category_index, favorites, visible_recipes

logger = get_logger("book")

DEFAULT_RECIPES = (
    ("Pasta", ["Pasta", "Tomato sauce", "Cheese"], "Cook pasta, add sauce, sprinkle cheese", "Italian"),
    ("Salad", ["Lettuce", "Tomato", "Cucumber", "Dressing"], "Chop veggies, mix with dressing", "Healthy"),
    ("Mac & Cheese", ["Macaroni", "Cheese"], "Cook macaroni and put the cheese in", "Comfort Food"),
)


def parse_ingredients(text: str) -> List[str]:
    """Split comma-separated ingredients, trimming and dropping blanks."""
    return [part.strip() for part in text.split(",") if part.strip()]


class RecipeBook:
    """Ordered in-memory collection that writes itself back after every change.

    The store is passed in rather than looked up, so tests can hand over a
    store on an in-memory namespace.
    """

    def __init__(self, store: RecipeStore, recipes: Optional[Iterable[Recipe]] = None):
        self.store = store
        self._recipes: List[Recipe] = []

        seen = set()
        for recipe in recipes or []:
            if recipe.id in seen:
                logger.warning(f"Dropping duplicate recipe id {recipe.id} ({recipe.name!r})")
                continue
            seen.add(recipe.id)
            self._recipes.append(recipe)

    @classmethod
    def open(cls, store: RecipeStore) -> "RecipeBook":
        """Create a book holding whatever the store has saved."""
        return cls(store, store.load())

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        return tuple(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def _persist(self) -> bool:
        return self.store.save(self._recipes)

    def _index_of(self, recipe_id: str) -> int:
        for index, recipe in enumerate(self._recipes):
            if recipe.id == recipe_id:
                return index
        raise KeyError(recipe_id)

    def get(self, recipe_id: str) -> Recipe:
        """Look a recipe up by id."""
        return self._recipes[self._index_of(recipe_id)]

    def add(self, recipe: Recipe) -> Recipe:
        if any(existing.id == recipe.id for existing in self._recipes):
            raise ValueError(f"Recipe {recipe.id} is already in the book")
        self._recipes.append(recipe)
        logger.info(f"Added recipe {recipe.name!r} ({recipe.id})")
        self._persist()
        return recipe

    def add_from_form(
        self,
        name: str,
        ingredients_text: str,
        instructions: str,
        category: str,
        image: Optional[bytes] = None,
    ) -> Recipe:
        """Validate add-form input and append the resulting recipe.

        Args:
            name: Recipe name, must not be blank.
            ingredients_text: Comma-separated ingredients, must not be blank.
            instructions: Free text, must not be blank.
            category: Category text.
            image: Optional encoded photo; re-encoded at the storage quality.

        Raises:
            ValueError: If a required field is blank or the photo is unreadable.
        """
        blank = [
            label
            for label, value in (("name", name), ("ingredients", ingredients_text), ("instructions", instructions))
            if not value.strip()
        ]
        if blank:
            raise ValueError(f"Missing {', '.join(blank)}")

        ingredients = parse_ingredients(ingredients_text)
        if not ingredients:
            raise ValueError("Missing ingredients")

        recipe = Recipe.create(name.strip(), ingredients, instructions.strip(), category.strip())
        if image is not None:
            recipe.attach_image(image)
        return self.add(recipe)

    def delete_at(self, offsets: Iterable[int]) -> List[Recipe]:
        """Remove recipes at the given positions, keeping the rest in order."""
        positions = set(offsets)
        size = len(self._recipes)
        out_of_range = sorted(p for p in positions if not -size <= p < size)
        if out_of_range:
            raise IndexError(f"No recipe at position(s) {out_of_range}")

        positions = {p % size for p in positions}
        removed = [r for i, r in enumerate(self._recipes) if i in positions]
        self._recipes = [r for i, r in enumerate(self._recipes) if i not in positions]

        if removed:
            logger.info(f"Deleted {len(removed)} recipe(s)")
            self._persist()
        return removed

    def delete(self, recipe_id: str) -> Recipe:
        """Remove one recipe by id."""
        return self.delete_at([self._index_of(recipe_id)])[0]

    def toggle_favorite(self, recipe_id: str) -> bool:
        recipe = self.get(recipe_id)
        value = recipe.toggle_favorite()
        logger.info(f"Recipe {recipe.id} favorite={value}")
        self._persist()
        return value

    def visible(self, category: str = ALL_CATEGORIES, query: str = "") -> List[Recipe]:
        return visible_recipes(self._recipes, category, query)

    def categories(self) -> List[str]:
        return category_index(self._recipes)

    def favorites(self) -> List[Recipe]:
        return favorites(self._recipes)

    def seed(self, recipes: Sequence[tuple] = DEFAULT_RECIPES) -> List[Recipe]:
        """Append the starter recipes."""
        added = [Recipe.create(name, ingredients, instructions, category)
                 for name, ingredients, instructions, category in recipes]
        self._recipes.extend(added)
        logger.info(f"Seeded {len(added)} recipes")
        self._persist()
        return added

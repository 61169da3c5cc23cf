import pytest

from reciper.models import Recipe
from reciper.views import (
    ALL_CATEGORIES,
    category_index,
    favorites,
    filter_by_category,
    search,
    visible_recipes,
)


def recipe(name: str, ingredients: list[str], category: str = "Italian") -> Recipe:
    return Recipe.create(name, ingredients, "", category)


@pytest.fixture
def collection() -> list[Recipe]:
    return [
        recipe("Pasta", ["Cheese"], "Italian"),
        recipe("Salad", ["Pasta-flavored dressing"], "Healthy"),
        recipe("Tacos", ["Tortilla", "Beef"], "Mexican"),
        recipe("Lasagne", ["Pasta sheets", "Beef"], "Italian"),
    ]


def test_all_is_passthrough(collection: list[Recipe]) -> None:
    assert filter_by_category(collection, ALL_CATEGORIES) == collection


def test_category_filter_is_exact(collection: list[Recipe]) -> None:
    names = [r.name for r in filter_by_category(collection, "Italian")]
    assert names == ["Pasta", "Lasagne"]
    assert filter_by_category(collection, "italian") == []
    assert filter_by_category(collection, "Ital") == []


def test_category_index_moves_other_last() -> None:
    recipes = [recipe("a", [], "Zebra"), recipe("b", [], "Other"), recipe("c", [], "Apple")]
    index = category_index(recipes)
    assert [c for c in index if c != ALL_CATEGORIES] == ["Apple", "Zebra", "Other"]
    assert index == ["All", "Apple", "Zebra", "Other"]


def test_category_index_is_distinct(collection: list[Recipe]) -> None:
    assert category_index(collection) == ["All", "Healthy", "Italian", "Mexican"]


def test_category_index_of_empty_collection() -> None:
    assert category_index([]) == ["All"]


def test_empty_query_is_passthrough(collection: list[Recipe]) -> None:
    assert search(collection, "") == collection


def test_search_matches_name_or_ingredients_case_insensitively() -> None:
    recipes = [recipe("Pasta", ["Cheese"]), recipe("Salad", ["Pasta-flavored dressing"])]
    assert search(recipes, "pasta") == recipes
    assert search(recipes, "PASTA") == recipes


def test_search_spans_joined_ingredients() -> None:
    recipes = [recipe("Toast", ["Butter", "Jam"])]
    assert search(recipes, "butter jam") == recipes
    assert search(recipes, "butterjam") == []


def test_search_no_match(collection: list[Recipe]) -> None:
    assert search(collection, "sushi") == []


def test_filters_compose_category_first(collection: list[Recipe]) -> None:
    names = [r.name for r in visible_recipes(collection, "Italian", "beef")]
    assert names == ["Lasagne"]
    assert [r.name for r in visible_recipes(collection, "Healthy", "pasta")] == ["Salad"]
    assert visible_recipes(collection, "Mexican", "pasta") == []


def test_visible_defaults_show_everything(collection: list[Recipe]) -> None:
    assert visible_recipes(collection) == collection


def test_favorites(collection: list[Recipe]) -> None:
    collection[2].toggle_favorite()
    assert favorites(collection) == [collection[2]]

"""CLI for the recipe collection using typer."""

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from .book import RecipeBook
from .images import FileImageSource
from .logger import configure_logging
from .models import SUGGESTED_CATEGORIES, Recipe
from .runtime import get_runtime_context
from .views import ALL_CATEGORIES

load_dotenv()

app = typer.Typer(
    help="Personal recipe collection",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)
console = Console()

SHORT_ID = 8


@app.callback()
def main() -> None:
    """Manage recipes stored in the local profile."""
    configure_logging(get_runtime_context().profile)


def _book() -> RecipeBook:
    book = get_runtime_context().book
    _warn_on_store_error(book)
    return book


def _warn_on_store_error(book: RecipeBook) -> None:
    error = book.store.last_error
    if error is not None:
        console.print(f"[yellow]Warning: saved recipes could not be used ({escape(str(error))})[/yellow]")


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def _resolve(book: RecipeBook, recipe_id: str) -> Recipe:
    """Find a recipe by full id or unique id prefix."""
    candidates = [recipe for recipe in book if recipe.id.startswith(recipe_id)]
    if not recipe_id or not candidates:
        _fail(f"Recipe '{recipe_id}' not found.")
    if len(candidates) > 1:
        _fail(f"Recipe id '{recipe_id}' is ambiguous.")
    return candidates[0]


@app.command("list")
def list_recipes(
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Category to show"),
    search: str = typer.Option("", "--search", "-s", help="Text to find in names or ingredients"),
    favorites: bool = typer.Option(False, "--favorites", help="Only show favorites"),
):
    """List recipes."""
    book = _book()
    recipes = book.visible(category, search)
    if favorites:
        recipes = [recipe for recipe in recipes if recipe.is_favorite]

    if not recipes:
        console.print("[yellow]No recipes found.[/yellow]")
        return

    table = Table(title="Recipes")
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("★", justify="center")
    for recipe in recipes:
        table.add_row(
            recipe.id[:SHORT_ID],
            escape(recipe.name),
            escape(recipe.category),
            "★" if recipe.is_favorite else "",
        )
    console.print(table)


@app.command()
def show(recipe_id: str = typer.Argument(..., help="Recipe id or id prefix")):
    """Show a recipe."""
    recipe = _resolve(_book(), recipe_id)

    content = f"# {recipe.name}\n\n"
    content += f"**Category:** {recipe.category}\n\n"
    if recipe.is_favorite:
        content += "**Favorite**\n\n"

    content += "## Ingredients\n\n"
    content += "".join(f"- {ingredient}\n" for ingredient in recipe.ingredients)
    content += f"\n## Instructions\n\n{recipe.instructions}\n"

    console.print(Markdown(content))

    if recipe.image_data is not None:
        image = recipe.image
        if image is None:
            console.print("[yellow]Photo could not be decoded.[/yellow]")
        else:
            width, height = image.size
            console.print(f"Photo: {width}x{height}, {len(recipe.image_data) // 1024} KB")


@app.command()
def add(
    name: str = typer.Argument(..., help="Recipe name"),
    ingredients: str = typer.Option(..., "--ingredients", "-i", help="Comma-separated ingredients"),
    instructions: str = typer.Option(..., "--instructions", "-n", help="How to make it"),
    category: str = typer.Option(
        "Italian", "--category", "-c",
        help=f"Category (suggested: {', '.join(SUGGESTED_CATEGORIES)})",
    ),
    image: Optional[Path] = typer.Option(None, "--image", help="Photo to attach"),
):
    """Add a new recipe."""
    book = _book()

    photo = None
    if image is not None:
        photo = FileImageSource(image).capture()
        if photo is None:
            console.print(f"[yellow]No image at {escape(str(image))}; adding without a photo.[/yellow]")

    try:
        recipe = book.add_from_form(name, ingredients, instructions, category, image=photo)
    except ValueError as e:
        _fail(f"Error: {e}")

    _warn_on_store_error(book)
    console.print(f"[green]✓[/green] Added recipe: {escape(recipe.name)} ({recipe.id[:SHORT_ID]})")


@app.command()
def delete(recipe_ids: List[str] = typer.Argument(..., help="Recipe ids or id prefixes")):
    """Delete recipes."""
    book = _book()
    targets = [_resolve(book, recipe_id) for recipe_id in recipe_ids]
    positions = [index for index, recipe in enumerate(book) if any(recipe is t for t in targets)]

    for recipe in book.delete_at(positions):
        console.print(f"[green]✓[/green] Deleted recipe: {escape(recipe.name)}")
    _warn_on_store_error(book)


@app.command()
def favorite(recipe_id: str = typer.Argument(..., help="Recipe id or id prefix")):
    """Toggle a recipe's favorite flag."""
    book = _book()
    recipe = _resolve(book, recipe_id)
    if book.toggle_favorite(recipe.id):
        console.print(f"[yellow]★[/yellow] {escape(recipe.name)} is a favorite")
    else:
        console.print(f"{escape(recipe.name)} is no longer a favorite")
    _warn_on_store_error(book)


@app.command()
def categories():
    """List categories present in the collection."""
    for category in _book().categories():
        console.print(f"  • {escape(category)}")


@app.command()
def seed():
    """Add the starter recipes."""
    book = _book()
    added = book.seed()
    _warn_on_store_error(book)
    console.print(f"[green]✓[/green] Added {len(added)} starter recipes")


if __name__ == "__main__":
    app()

"""
foodcost CLI — command-line interface.

Usage:
    foodcost convert 500 g kg
    foodcost cost --price 200 --purchase-qty 1 --purchase-unit kg --yield 80 --used-qty 500 --used-unit g
    foodcost ingredient add "Chicken breast" --price 200 --qty 1 --unit kg --yield 80
    foodcost recipe add "Grilled chicken" --item "Chicken breast:500:g" --servings 2 --price 350
    foodcost recipe show <id>
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from foodcost import __version__
from foodcost.book import RecipeBook, RecipeSummary
from foodcost.calculations import (
    FoodCostStatus,
    convert_quantity,
    ingredient_usage_cost,
)
from foodcost.config import FoodCostConfig
from foodcost.errors import FoodCostError, NotFoundError
from foodcost.formatters import format_currency, format_percentage, format_quantity
from foodcost.models import Ingredient, IngredientCategory, Recipe, RecipeItem
from foodcost.repository import JsonFileRepository
from foodcost.units import BASE_UNITS, UNIT_METADATA, Unit

app = typer.Typer(
    name="foodcost",
    help="🍽️ foodcost — ingredient, recipe and food cost calculator",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
ingredient_app = typer.Typer(help="Manage ingredients", no_args_is_help=True)
recipe_app = typer.Typer(help="Manage recipes", no_args_is_help=True)
app.add_typer(ingredient_app, name="ingredient")
app.add_typer(recipe_app, name="recipe")

console = Console()

_STATUS_STYLES = {
    FoodCostStatus.UNPRICED: "dim",
    FoodCostStatus.LOW: "blue",
    FoodCostStatus.IDEAL: "green",
    FoodCostStatus.HIGH: "red",
}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]foodcost[/bold] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: str = typer.Option(
        "foodcost.yaml",
        "--config",
        "-c",
        help="Path to config file",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        help="Directory holding ingredients.json and recipes.json",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """🍽️ foodcost — cost your recipes from what you pay for ingredients."""
    overrides = {"data_dir": data_dir} if data_dir else {}
    config_path = config if Path(config).exists() else None
    cfg = FoodCostConfig.load(config_path, **overrides)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = cfg


def _config(ctx: typer.Context) -> FoodCostConfig:
    return ctx.obj if isinstance(ctx.obj, FoodCostConfig) else FoodCostConfig()


def _book(cfg: FoodCostConfig) -> RecipeBook:
    return RecipeBook(
        ingredients=JsonFileRepository(cfg.ingredients_path, Ingredient, kind="ingredient"),
        recipes=JsonFileRepository(cfg.recipes_path, Recipe, kind="recipe"),
        low_food_cost_pct=cfg.thresholds.low_food_cost_pct,
        high_food_cost_pct=cfg.thresholds.high_food_cost_pct,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _money(cfg: FoodCostConfig, amount: float) -> str:
    return format_currency(amount, cfg.currency_symbol, cfg.decimals)


# ---------------------------------------------------------------------------
# Calculator commands
# ---------------------------------------------------------------------------


@app.command()
def convert(
    quantity: float = typer.Argument(..., help="Quantity to convert"),
    from_unit: Unit = typer.Argument(..., help="Source unit"),
    to_unit: Unit = typer.Argument(..., help="Target unit"),
) -> None:
    """Convert a quantity between units of the same family."""
    try:
        result = convert_quantity(quantity, from_unit, to_unit)
    except FoodCostError as e:
        _fail(str(e))
    console.print(f"{format_quantity(quantity, from_unit)} = [bold]{format_quantity(result, to_unit)}[/bold]")


@app.command()
def cost(
    ctx: typer.Context,
    price: float = typer.Option(..., "--price", help="Price per purchase unit"),
    purchase_qty: float = typer.Option(1.0, "--purchase-qty", help="Quantity purchased"),
    purchase_unit: Unit = typer.Option(..., "--purchase-unit", help="Unit the ingredient is bought in"),
    yield_pct: float = typer.Option(100.0, "--yield", help="Usable percentage after prep (0-100]"),
    used_qty: float = typer.Option(..., "--used-qty", help="Quantity used in the recipe"),
    used_unit: Unit = typer.Option(..., "--used-unit", help="Unit of the used quantity"),
) -> None:
    """Cost of using part of an ingredient, after yield loss."""
    cfg = _config(ctx)
    try:
        result = ingredient_usage_cost(price, purchase_qty, purchase_unit, yield_pct, used_qty, used_unit)
    except FoodCostError as e:
        _fail(str(e))
    console.print(
        f"{format_quantity(used_qty, used_unit)} costs [bold green]{_money(cfg, result)}[/bold green]"
    )


@app.command()
def units() -> None:
    """List supported units and their conversion factors."""
    table = Table(title="Units")
    table.add_column("Unit", style="bold cyan")
    table.add_column("Label")
    table.add_column("Type")
    table.add_column("Factor to base", justify="right")

    for meta in UNIT_METADATA.values():
        base = BASE_UNITS[meta.type].value
        table.add_row(meta.unit.value, meta.label, meta.type.value, f"{meta.conversion_factor:g} {base}")

    console.print(table)


# ---------------------------------------------------------------------------
# Ingredients
# ---------------------------------------------------------------------------


@ingredient_app.command("add")
def ingredient_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Ingredient name"),
    price: float = typer.Option(..., "--price", help="Price per purchase unit"),
    qty: float = typer.Option(1.0, "--qty", help="Quantity purchased"),
    unit: Unit = typer.Option(..., "--unit", help="Purchase unit"),
    yield_pct: float = typer.Option(100.0, "--yield", help="Usable percentage after prep"),
    category: IngredientCategory = typer.Option(IngredientCategory.OTHER, "--category"),
    notes: str = typer.Option(None, "--notes"),
) -> None:
    """Add an ingredient."""
    book = _book(_config(ctx))
    try:
        ingredient = book.add_ingredient(
            name=name,
            price_per_unit=price,
            purchase_quantity=qty,
            purchase_unit=unit,
            yield_percentage=yield_pct,
            category=category,
            notes=notes,
        )
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Added [bold]{ingredient.name}[/bold] ({ingredient.id})")


@ingredient_app.command("list")
def ingredient_list(ctx: typer.Context) -> None:
    """List ingredients."""
    cfg = _config(ctx)
    book = _book(cfg)

    table = Table(title="Ingredients")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Purchase", justify="right")
    table.add_column("Yield", justify="right")

    for ing in book.list_ingredients():
        table.add_row(
            ing.id,
            ing.name,
            ing.category.value,
            f"{_money(cfg, ing.price_per_unit)}/{ing.purchase_unit.value}",
            format_quantity(ing.purchase_quantity, ing.purchase_unit),
            format_percentage(ing.yield_percentage, 0),
        )

    console.print(table)


@ingredient_app.command("update")
def ingredient_update(
    ctx: typer.Context,
    ingredient_id: str = typer.Argument(..., help="Ingredient ID"),
    price: float = typer.Option(None, "--price"),
    qty: float = typer.Option(None, "--qty"),
    yield_pct: float = typer.Option(None, "--yield"),
) -> None:
    """Update an ingredient's price, quantity or yield and re-cost its recipes."""
    book = _book(_config(ctx))
    changes = {
        key: value
        for key, value in {
            "price_per_unit": price,
            "purchase_quantity": qty,
            "yield_percentage": yield_pct,
        }.items()
        if value is not None
    }
    try:
        ingredient = book.update_ingredient(ingredient_id, **changes)
    except (NotFoundError, ValueError) as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Updated [bold]{ingredient.name}[/bold]")


@ingredient_app.command("remove")
def ingredient_remove(
    ctx: typer.Context,
    ingredient_id: str = typer.Argument(..., help="Ingredient ID"),
) -> None:
    """Remove an ingredient."""
    book = _book(_config(ctx))
    try:
        book.remove_ingredient(ingredient_id)
    except NotFoundError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Removed {ingredient_id}")


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------


def _parse_item(book: RecipeBook, entry: str) -> RecipeItem:
    """Parse ``ingredient:quantity:unit``; the ingredient is an ID or a name."""
    parts = entry.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Item must look like 'ingredient:quantity:unit', got {entry!r}")
    ref, quantity, unit = parts

    ingredient_id = ref
    if book.get_ingredient(ref) is None:
        matches = [i for i in book.list_ingredients() if i.name.lower() == ref.lower()]
        if matches:
            ingredient_id = matches[0].id

    return RecipeItem(ingredient_id=ingredient_id, used_quantity=float(quantity), used_unit=Unit(unit))


@recipe_app.command("add")
def recipe_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Recipe name"),
    item: list[str] = typer.Option(
        ...,
        "--item",
        "-i",
        help="Ingredient line as ingredient:quantity:unit (repeatable)",
    ),
    servings: int = typer.Option(1, "--servings", "-s"),
    price: float = typer.Option(0.0, "--price", help="Sale price"),
    description: str = typer.Option(None, "--description"),
) -> None:
    """Add a recipe and show its cost."""
    cfg = _config(ctx)
    book = _book(cfg)
    try:
        items = [_parse_item(book, entry) for entry in item]
        recipe = book.add_recipe(
            name=name,
            items=items,
            servings=servings,
            sale_price=price,
            description=description,
        )
    except ValueError as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/green] Added [bold]{recipe.name}[/bold] ({recipe.id}) — "
        f"cost {_money(cfg, recipe.total_cost)}"
    )


@recipe_app.command("list")
def recipe_list(ctx: typer.Context) -> None:
    """List recipes with their cost figures."""
    cfg = _config(ctx)
    book = _book(cfg)

    table = Table(title="Recipes")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Servings", justify="right")
    table.add_column("Total Cost", justify="right")
    table.add_column("Sale Price", justify="right")
    table.add_column("Food Cost %", justify="right")

    for recipe in book.list_recipes():
        table.add_row(
            recipe.id,
            recipe.name,
            str(recipe.servings),
            _money(cfg, recipe.total_cost),
            _money(cfg, recipe.sale_price),
            format_percentage(recipe.food_cost_percentage),
        )

    console.print(table)


@recipe_app.command("show")
def recipe_show(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(..., help="Recipe ID"),
) -> None:
    """Show a recipe's cost summary."""
    cfg = _config(ctx)
    book = _book(cfg)
    try:
        summary = book.summarize(recipe_id)
    except (NotFoundError, FoodCostError) as e:
        _fail(str(e))
    _display_summary(cfg, summary)


@recipe_app.command("export")
def recipe_export(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(..., help="Recipe ID"),
    output: str = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (.md); defaults to <recipe name>.md",
    ),
) -> None:
    """Save a printable Markdown cost sheet."""
    from foodcost.exporters import render_markdown

    cfg = _config(ctx)
    book = _book(cfg)
    try:
        summary = book.summarize(recipe_id)
    except (NotFoundError, FoodCostError) as e:
        _fail(str(e))

    path = Path(output or f"{summary.recipe_name.replace(' ', '_').lower()}.md")
    path.write_text(render_markdown(summary, cfg), encoding="utf-8")
    console.print(f"[green]✓[/green] Cost sheet saved to [bold]{path}[/bold]")


@recipe_app.command("remove")
def recipe_remove(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(..., help="Recipe ID"),
) -> None:
    """Remove a recipe."""
    book = _book(_config(ctx))
    try:
        book.remove_recipe(recipe_id)
    except NotFoundError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Removed {recipe_id}")


def _display_summary(cfg: FoodCostConfig, summary: RecipeSummary) -> None:
    """Display a recipe summary in the terminal."""
    console.print(Panel.fit(f"[bold blue]🍽️ {summary.recipe_name}[/bold blue] — Cost Summary"))

    table = Table(show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    style = _STATUS_STYLES[summary.status]
    table.add_row("Total Cost", _money(cfg, summary.total_cost))
    table.add_row("Servings", str(summary.servings))
    table.add_row("Cost per Serving", _money(cfg, summary.cost_per_serving))
    table.add_row("Sale Price", _money(cfg, summary.sale_price))
    table.add_row(
        "Food Cost %",
        f"[{style}]{format_percentage(summary.food_cost_percentage)}[/{style}]",
    )
    table.add_row("Gross Profit", _money(cfg, summary.gross_profit))
    table.add_row("Gross Margin", format_percentage(summary.gross_profit_margin))
    console.print(table)

    if summary.breakdown.lines:
        lines = Table(title="Ingredients")
        lines.add_column("Ingredient", style="bold")
        lines.add_column("Quantity", justify="right")
        lines.add_column("Cost", justify="right")
        lines.add_column("Share", justify="right")
        for line in sorted(summary.breakdown.lines, key=lambda x: x.cost, reverse=True):
            lines.add_row(
                line.ingredient_name,
                format_quantity(line.used_quantity, line.used_unit),
                _money(cfg, line.cost),
                format_percentage(summary.breakdown.share_of(line)),
            )
        console.print(lines)

    for ingredient_id in summary.missing_ingredient_ids:
        console.print(f"[yellow]⚠ Ingredient {ingredient_id} not found; costed at zero[/yellow]")


if __name__ == "__main__":
    app()

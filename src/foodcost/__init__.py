"""
foodcost — ingredient, recipe and food cost calculator.

Unit conversion, yield-aware ingredient costing, recipe totals and
profitability figures, with a small recipe book and CLI around them.
"""

__version__ = "0.1.0"
__all__ = [
    "Ingredient",
    "Recipe",
    "RecipeBook",
    "RecipeItem",
    "Unit",
    "UnitType",
    "convert_quantity",
    "ingredient_usage_cost",
    "recipe_total_cost",
]

from foodcost.book import RecipeBook  # noqa: E402
from foodcost.calculations import (  # noqa: E402
    convert_quantity,
    ingredient_usage_cost,
    recipe_total_cost,
)
from foodcost.models import Ingredient, Recipe, RecipeItem  # noqa: E402
from foodcost.units import Unit, UnitType  # noqa: E402

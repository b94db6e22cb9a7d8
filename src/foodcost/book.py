"""
Recipe Book — ingredient and recipe management with derived costs.

Keeps each recipe's ``total_cost`` and ``food_cost_percentage`` in step with
its items, its sale price and the prices of the ingredients it uses. All
arithmetic is delegated to ``foodcost.calculations``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from pydantic import BaseModel

from foodcost.calculations import (
    FoodCostStatus,
    IngredientLookup,
    RecipeCostBreakdown,
    cost_per_serving,
    food_cost_percentage,
    food_cost_status,
    gross_profit,
    gross_profit_margin,
    recipe_cost_breakdown,
)
from foodcost.errors import NotFoundError
from foodcost.models import Ingredient, Recipe, RecipeItem
from foodcost.repository import InMemoryRepository, Repository

logger = logging.getLogger("foodcost.book")


def _check_fields(model: type[BaseModel], changes: dict[str, Any]) -> None:
    unknown = sorted(set(changes) - set(model.model_fields))
    if unknown:
        raise ValueError(f"Unknown {model.__name__} field(s): {', '.join(unknown)}")


@dataclass
class RecipeSummary:
    """Cost and profitability figures for one recipe."""

    recipe_id: str
    recipe_name: str
    servings: int
    sale_price: float
    total_cost: float
    cost_per_serving: float
    food_cost_percentage: float
    gross_profit: float
    gross_profit_margin: float
    status: FoodCostStatus
    breakdown: RecipeCostBreakdown

    @property
    def is_profitable(self) -> bool:
        return self.sale_price > 0 and self.gross_profit > 0

    @property
    def missing_ingredient_ids(self) -> list[str]:
        return self.breakdown.missing_ingredient_ids


class RecipeBook:
    """Ingredient and recipe store backed by injected repositories.

    Usage::

        book = RecipeBook()
        chicken = book.add_ingredient(
            name="Chicken breast",
            price_per_unit=200,
            purchase_quantity=1,
            purchase_unit="kg",
            yield_percentage=80,
        )
        recipe = book.add_recipe(
            name="Grilled chicken",
            items=[RecipeItem(ingredient_id=chicken.id, used_quantity=500, used_unit="g")],
            servings=2,
            sale_price=350,
        )
        recipe.total_cost  # 125.0
    """

    def __init__(
        self,
        ingredients: Repository[Ingredient] | None = None,
        recipes: Repository[Recipe] | None = None,
        low_food_cost_pct: float = 28.0,
        high_food_cost_pct: float = 35.0,
    ) -> None:
        self.ingredients = ingredients if ingredients is not None else InMemoryRepository(kind="ingredient")
        self.recipes = recipes if recipes is not None else InMemoryRepository(kind="recipe")
        self.low_food_cost_pct = low_food_cost_pct
        self.high_food_cost_pct = high_food_cost_pct

    # -- ingredients ---------------------------------------------------------

    def add_ingredient(self, **fields: Any) -> Ingredient:
        """Create an ingredient with a fresh id and timestamps."""
        fields.pop("id", None)
        ingredient = Ingredient(**fields)
        self.ingredients.upsert(ingredient)
        logger.info("Added ingredient %s (%s)", ingredient.name, ingredient.id)
        return ingredient

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def list_ingredients(self) -> list[Ingredient]:
        return self.ingredients.list()

    def update_ingredient(self, ingredient_id: str, **changes: Any) -> Ingredient:
        """Apply changes to an ingredient and re-cost the recipes using it."""
        current = self.ingredients.get(ingredient_id)
        if current is None:
            raise NotFoundError("ingredient", ingredient_id)

        changes.pop("id", None)
        changes.pop("created_at", None)
        _check_fields(Ingredient, changes)
        data = current.model_dump()
        data.update(changes)
        data["updated_at"] = datetime.now(timezone.utc)
        updated = Ingredient.model_validate(data)

        # Re-cost against the new values first; nothing is stored if any recipe fails
        lookup = {**self.ingredients.as_mapping(), updated.id: updated}
        recosted = [
            self._with_costs(recipe, lookup)
            for recipe in self.recipes.list()
            if ingredient_id in recipe.ingredient_ids
        ]

        self.ingredients.upsert(updated)
        for recipe in recosted:
            self.recipes.upsert(recipe)
        return updated

    def remove_ingredient(self, ingredient_id: str) -> None:
        """Delete an ingredient. Recipes that used it keep their lines."""
        self.ingredients.delete(ingredient_id)
        logger.info("Removed ingredient %s", ingredient_id)

    # -- recipes -------------------------------------------------------------

    def add_recipe(
        self,
        name: str,
        items: Iterable[RecipeItem | dict[str, Any]],
        servings: int = 1,
        sale_price: float | None = None,
        **fields: Any,
    ) -> Recipe:
        """Create a recipe and derive its cost figures."""
        fields.pop("id", None)
        recipe = Recipe(
            name=name,
            items=[RecipeItem.model_validate(item) for item in items],
            servings=servings,
            sale_price=sale_price or 0.0,
            **fields,
        )
        recipe = self._with_costs(recipe)
        self.recipes.upsert(recipe)
        logger.info("Added recipe %s (%s): cost %.2f", recipe.name, recipe.id, recipe.total_cost)
        return recipe

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def list_recipes(self) -> list[Recipe]:
        return self.recipes.list()

    def update_recipe(self, recipe_id: str, **changes: Any) -> Recipe:
        """Apply changes to a recipe; derived cost fields are recomputed."""
        current = self.recipes.get(recipe_id)
        if current is None:
            raise NotFoundError("recipe", recipe_id)

        for derived in ("id", "created_at", "total_cost", "food_cost_percentage"):
            changes.pop(derived, None)
        _check_fields(Recipe, changes)
        if changes.get("sale_price") is None and "sale_price" in changes:
            changes["sale_price"] = 0.0

        data = current.model_dump()
        data.update(changes)
        data["updated_at"] = datetime.now(timezone.utc)
        updated = self._with_costs(Recipe.model_validate(data))
        self.recipes.upsert(updated)
        return updated

    def remove_recipe(self, recipe_id: str) -> None:
        self.recipes.delete(recipe_id)
        logger.info("Removed recipe %s", recipe_id)

    def recalculate(self, recipe_id: str) -> Recipe:
        """Refresh a recipe's derived cost fields from current prices."""
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            raise NotFoundError("recipe", recipe_id)
        updated = self._with_costs(recipe)
        self.recipes.upsert(updated)
        return updated

    def recalculate_all(self) -> list[Recipe]:
        return [self.recalculate(recipe.id) for recipe in self.recipes.list()]

    def summarize(self, recipe_id: str) -> RecipeSummary:
        """Full cost and profitability figures for a recipe."""
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            raise NotFoundError("recipe", recipe_id)

        breakdown = self._breakdown(recipe)
        total = breakdown.total_cost
        pct = food_cost_percentage(total, recipe.sale_price)

        return RecipeSummary(
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            servings=recipe.servings,
            sale_price=recipe.sale_price,
            total_cost=total,
            cost_per_serving=cost_per_serving(total, recipe.servings),
            food_cost_percentage=pct,
            gross_profit=gross_profit(recipe.sale_price, total),
            gross_profit_margin=gross_profit_margin(recipe.sale_price, total),
            status=food_cost_status(
                pct,
                recipe.sale_price,
                low_pct=self.low_food_cost_pct,
                high_pct=self.high_food_cost_pct,
            ),
            breakdown=breakdown,
        )

    # -- internals -----------------------------------------------------------

    def _breakdown(
        self,
        recipe: Recipe,
        lookup: IngredientLookup | None = None,
    ) -> RecipeCostBreakdown:
        breakdown = recipe_cost_breakdown(recipe.items, lookup if lookup is not None else self.ingredients.get)
        for ingredient_id in breakdown.missing_ingredient_ids:
            logger.warning(
                "Ingredient %s not found for recipe %s (%s)",
                ingredient_id,
                recipe.name,
                recipe.id,
            )
        return breakdown

    def _with_costs(self, recipe: Recipe, lookup: IngredientLookup | None = None) -> Recipe:
        total = self._breakdown(recipe, lookup).total_cost
        return recipe.model_copy(update={
            "total_cost": total,
            "food_cost_percentage": food_cost_percentage(total, recipe.sale_price),
        })

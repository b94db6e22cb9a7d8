"""
Domain records — ingredients, recipe items and recipes.

These are the shapes the recipe book stores and the CLI reads. Field
constraints mirror the entry forms; the calculation engine re-checks its own
numeric invariants and does not rely on them.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from foodcost.units import Unit


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class IngredientCategory(str, Enum):
    """Ingredient categories for organization and filtering."""

    PROTEIN = "protein"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    DAIRY = "dairy"
    GRAIN = "grain"
    SPICE = "spice"
    OIL = "oil"
    BEVERAGE = "beverage"
    OTHER = "other"


class Ingredient(BaseModel):
    """A purchasable food item.

    ``price_per_unit`` is the price paid for one ``purchase_unit``;
    ``yield_percentage`` is the share of the purchased quantity still usable
    after trimming and preparation (80 means 20% is lost).
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1, max_length=100)
    category: IngredientCategory = IngredientCategory.OTHER
    price_per_unit: float = Field(ge=0)
    purchase_quantity: float = Field(gt=0)
    purchase_unit: Unit
    yield_percentage: float = Field(default=100.0, gt=0, le=100)
    notes: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class RecipeItem(BaseModel):
    """One line of ingredient usage within a recipe."""

    id: str = Field(default_factory=new_id)
    ingredient_id: str = Field(min_length=1)
    used_quantity: float = Field(gt=0)
    used_unit: Unit
    notes: str | None = Field(default=None, max_length=200)


class Recipe(BaseModel):
    """A dish with its ingredient lines and derived cost figures.

    ``total_cost`` and ``food_cost_percentage`` are derived by the recipe
    book whenever items, sale price or ingredient prices change.
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    items: list[RecipeItem] = Field(default_factory=list)
    total_cost: float = 0.0
    sale_price: float = Field(default=0.0, ge=0)
    food_cost_percentage: float = 0.0
    servings: int = Field(default=1, gt=0)
    notes: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def ingredient_ids(self) -> set[str]:
        return {item.ingredient_id for item in self.items}

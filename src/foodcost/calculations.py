"""
Cost Calculation Engine — unit conversion, ingredient and recipe costing.

Pure functions only: every call reads its arguments and the read-only unit
table, performs no I/O and keeps no state.

Covers:
- Conversion between compatible units and to/from base units
- Ingredient usage cost after yield loss
- Recipe total cost and per-line breakdown
- Food cost percentage, cost per serving, gross profit and margin
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional, Union

from foodcost.errors import (
    IncompatibleUnitsError,
    InvalidQuantityError,
    InvalidYieldError,
    NegativePriceError,
)
from foodcost.units import Unit, UnitLike, are_compatible, metadata_of

if TYPE_CHECKING:
    from foodcost.models import Ingredient, RecipeItem

IngredientLookup = Union[
    Mapping[str, "Ingredient"],
    Callable[[str], Optional["Ingredient"]],
]


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------


def convert_quantity(quantity: float, from_unit: UnitLike, to_unit: UnitLike) -> float:
    """Convert a quantity between two units of the same family.

    >>> convert_quantity(1000, "g", "kg")
    1.0

    Raises:
        IncompatibleUnitsError: The units belong to different families.
    """
    if not are_compatible(from_unit, to_unit):
        raise IncompatibleUnitsError(from_unit, to_unit)

    if Unit(from_unit) == Unit(to_unit):
        return quantity

    base = quantity * metadata_of(from_unit).conversion_factor
    return base / metadata_of(to_unit).conversion_factor


def to_base_unit(quantity: float, unit: UnitLike) -> float:
    """Normalize a quantity to its family's base unit (kg, l or pcs)."""
    return quantity * metadata_of(unit).conversion_factor


def from_base_unit(quantity_in_base: float, unit: UnitLike) -> float:
    """Express a base-unit quantity in ``unit``."""
    return quantity_in_base / metadata_of(unit).conversion_factor


# ---------------------------------------------------------------------------
# Ingredient cost
# ---------------------------------------------------------------------------


def ingredient_usage_cost(
    price_per_unit: float,
    purchase_quantity: float,
    purchase_unit: UnitLike,
    yield_percentage: float,
    used_quantity: float,
    used_unit: UnitLike,
) -> float:
    """Cost of using part of a purchased ingredient, after yield loss.

    Formula: ``price / (purchase_base * yield%) * used_base``.

    Example: chicken breast bought at 200 per kg, 1 kg purchased, 80% yield,
    500 g used -> ``200 / (1 * 0.8) * 0.5 = 125``.

    Inputs are checked in this order, each with its own error: yield,
    quantities, price, unit compatibility.
    """
    if yield_percentage <= 0 or yield_percentage > 100:
        raise InvalidYieldError(yield_percentage)

    if purchase_quantity <= 0 or used_quantity <= 0:
        raise InvalidQuantityError(purchase_quantity, used_quantity)

    if price_per_unit < 0:
        raise NegativePriceError(price_per_unit)

    if not are_compatible(purchase_unit, used_unit):
        raise IncompatibleUnitsError(purchase_unit, used_unit)

    purchase_base = to_base_unit(purchase_quantity, purchase_unit)
    used_base = to_base_unit(used_quantity, used_unit)

    usable_base = purchase_base * (yield_percentage / 100)
    cost_per_base = price_per_unit / usable_base

    return cost_per_base * used_base


def ingredient_cost(ingredient: Ingredient, item: RecipeItem) -> float:
    """``ingredient_usage_cost`` for a stored ingredient and a recipe line."""
    return ingredient_usage_cost(
        price_per_unit=ingredient.price_per_unit,
        purchase_quantity=ingredient.purchase_quantity,
        purchase_unit=ingredient.purchase_unit,
        yield_percentage=ingredient.yield_percentage,
        used_quantity=item.used_quantity,
        used_unit=item.used_unit,
    )


def effective_cost_per_unit(ingredient: Ingredient, target_unit: UnitLike) -> float:
    """Price of one usable ``target_unit`` of an ingredient after yield loss.

    Bought at 10 per kg with 80% yield -> 12.50 per usable kg, 0.0125 per g.
    """
    if not are_compatible(ingredient.purchase_unit, target_unit):
        raise IncompatibleUnitsError(ingredient.purchase_unit, target_unit)
    if ingredient.yield_percentage <= 0 or ingredient.yield_percentage > 100:
        raise InvalidYieldError(ingredient.yield_percentage)

    factor = (
        metadata_of(ingredient.purchase_unit).conversion_factor
        / metadata_of(target_unit).conversion_factor
    )
    price_in_target = ingredient.price_per_unit / factor
    return price_in_target / (ingredient.yield_percentage / 100)


# ---------------------------------------------------------------------------
# Recipe cost
# ---------------------------------------------------------------------------


@dataclass
class LineCost:
    """Cost of one resolved recipe line."""

    item_id: str
    ingredient_id: str
    ingredient_name: str
    used_quantity: float
    used_unit: Unit
    cost: float


@dataclass
class RecipeCostBreakdown:
    """Per-line recipe cost, with the lines that could not be resolved."""

    lines: list[LineCost] = field(default_factory=list)
    missing_ingredient_ids: list[str] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum((line.cost for line in self.lines), 0.0)

    @property
    def is_complete(self) -> bool:
        """False when some lines reference unknown ingredients."""
        return not self.missing_ingredient_ids

    def share_of(self, line: LineCost) -> float:
        """A line's share of the total, in percent."""
        total = self.total_cost
        if total == 0:
            return 0.0
        return line.cost / total * 100


def _resolver(lookup: IngredientLookup) -> Callable[[str], Optional[Ingredient]]:
    if callable(lookup):
        return lookup
    return lookup.get


def recipe_cost_breakdown(
    items: Iterable[RecipeItem],
    ingredient_lookup: IngredientLookup,
) -> RecipeCostBreakdown:
    """Cost each recipe line; lines with unknown ingredients are set aside.

    ``ingredient_lookup`` is either a mapping of ingredient id to ingredient
    or a callable returning the ingredient (or None) for an id.
    """
    resolve = _resolver(ingredient_lookup)
    breakdown = RecipeCostBreakdown()

    for item in items:
        ingredient = resolve(item.ingredient_id)
        if ingredient is None:
            breakdown.missing_ingredient_ids.append(item.ingredient_id)
            continue

        breakdown.lines.append(LineCost(
            item_id=item.id,
            ingredient_id=item.ingredient_id,
            ingredient_name=ingredient.name,
            used_quantity=item.used_quantity,
            used_unit=Unit(item.used_unit),
            cost=ingredient_cost(ingredient, item),
        ))

    return breakdown


def recipe_total_cost(
    items: Iterable[RecipeItem],
    ingredient_lookup: IngredientLookup,
) -> float:
    """Sum of line costs. Lines whose ingredient is missing contribute 0."""
    return recipe_cost_breakdown(items, ingredient_lookup).total_cost


# ---------------------------------------------------------------------------
# Profitability
# ---------------------------------------------------------------------------


def food_cost_percentage(total_cost: float, sale_price: float) -> float:
    """Ingredient cost as a percentage of sale price (0 when unpriced)."""
    if sale_price == 0:
        return 0.0
    return (total_cost / sale_price) * 100


def cost_per_serving(total_cost: float, servings: float) -> float:
    if servings == 0:
        return 0.0
    return total_cost / servings


def gross_profit(sale_price: float, cost: float) -> float:
    return sale_price - cost


def gross_profit_margin(sale_price: float, cost: float) -> float:
    """Gross profit as a percentage of sale price (0 when unpriced)."""
    if sale_price == 0:
        return 0.0
    return (sale_price - cost) / sale_price * 100


class FoodCostStatus(str, Enum):
    """Where a food cost percentage sits against the target band."""

    UNPRICED = "unpriced"
    LOW = "low"
    IDEAL = "ideal"
    HIGH = "high"


def food_cost_status(
    percentage: float,
    sale_price: float,
    low_pct: float = 28.0,
    high_pct: float = 35.0,
) -> FoodCostStatus:
    """Classify a food cost percentage.

    28-35% is the usual restaurant range; below it may point at pricing
    issues, above it at a needed price increase or cost reduction.
    """
    if sale_price == 0:
        return FoodCostStatus.UNPRICED
    if percentage < low_pct:
        return FoodCostStatus.LOW
    if percentage > high_pct:
        return FoodCostStatus.HIGH
    return FoodCostStatus.IDEAL

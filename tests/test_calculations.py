"""Tests for the cost calculation engine."""

import pytest

from foodcost.calculations import (
    FoodCostStatus,
    convert_quantity,
    cost_per_serving,
    effective_cost_per_unit,
    food_cost_percentage,
    food_cost_status,
    from_base_unit,
    gross_profit,
    gross_profit_margin,
    ingredient_cost,
    ingredient_usage_cost,
    recipe_cost_breakdown,
    recipe_total_cost,
    to_base_unit,
)
from foodcost.errors import (
    FoodCostError,
    IncompatibleUnitsError,
    InvalidQuantityError,
    InvalidYieldError,
    NegativePriceError,
)
from foodcost.models import Ingredient, RecipeItem
from foodcost.units import Unit, UnitType


def _chicken() -> Ingredient:
    return Ingredient(
        id="chicken",
        name="Chicken breast",
        price_per_unit=200,
        purchase_quantity=1,
        purchase_unit=Unit.KILOGRAM,
        yield_percentage=80,
    )


def _milk() -> Ingredient:
    return Ingredient(
        id="milk",
        name="Milk",
        price_per_unit=50,
        purchase_quantity=1,
        purchase_unit=Unit.LITER,
    )


class TestConvertQuantity:
    def test_grams_to_kilograms(self) -> None:
        assert convert_quantity(1000, "g", "kg") == pytest.approx(1)

    def test_liters_to_milliliters(self) -> None:
        assert convert_quantity(2, "l", "ml") == pytest.approx(2000)

    @pytest.mark.parametrize("unit", list(Unit))
    @pytest.mark.parametrize("quantity", [0.1, 1 / 3, 12345.678, 0.0])
    def test_self_conversion_is_identity(self, unit: Unit, quantity: float) -> None:
        assert convert_quantity(quantity, unit, unit) == quantity

    @pytest.mark.parametrize("a,b", [("kg", "g"), ("g", "kg"), ("l", "ml"), ("ml", "l")])
    def test_round_trip(self, a: str, b: str) -> None:
        q = 0.37
        assert convert_quantity(convert_quantity(q, a, b), b, a) == pytest.approx(q)

    def test_incompatible_units_rejected(self) -> None:
        with pytest.raises(IncompatibleUnitsError) as exc_info:
            convert_quantity(1, "kg", "l")
        err = exc_info.value
        assert err.from_unit == Unit.KILOGRAM
        assert err.to_unit == Unit.LITER
        assert err.from_type == UnitType.WEIGHT
        assert err.to_type == UnitType.VOLUME
        assert "kg (weight)" in str(err)
        assert "l (volume)" in str(err)

    def test_count_not_convertible_to_weight(self) -> None:
        with pytest.raises(IncompatibleUnitsError):
            convert_quantity(3, "pcs", "g")


class TestBaseUnits:
    def test_to_base_unit(self) -> None:
        assert to_base_unit(1000, "g") == pytest.approx(1)
        assert to_base_unit(500, "ml") == pytest.approx(0.5)
        assert to_base_unit(4, "pcs") == 4

    def test_from_base_unit(self) -> None:
        assert from_base_unit(1, "g") == pytest.approx(1000)
        assert from_base_unit(0.5, "ml") == pytest.approx(500)
        assert from_base_unit(2, "kg") == 2


class TestIngredientUsageCost:
    def test_worked_example(self) -> None:
        assert ingredient_usage_cost(200, 1, "kg", 80, 500, "g") == 125

    def test_full_yield(self) -> None:
        assert ingredient_usage_cost(100, 1, "kg", 100, 1, "kg") == pytest.approx(100)

    def test_count_units(self) -> None:
        # 12 eggs for 60, all usable, 3 used
        assert ingredient_usage_cost(60, 12, "pcs", 100, 3, "pcs") == pytest.approx(15)

    def test_zero_price_is_free(self) -> None:
        assert ingredient_usage_cost(0, 1, "kg", 50, 1, "kg") == 0

    @pytest.mark.parametrize("yield_pct", [0, -5, 100.01, 101])
    def test_yield_out_of_range(self, yield_pct: float) -> None:
        with pytest.raises(InvalidYieldError) as exc_info:
            ingredient_usage_cost(10, 1, "kg", yield_pct, 1, "kg")
        assert exc_info.value.value == yield_pct
        assert str(yield_pct) in str(exc_info.value)

    def test_yield_upper_bound_accepted(self) -> None:
        assert ingredient_usage_cost(10, 1, "kg", 100, 1, "kg") == pytest.approx(10)

    @pytest.mark.parametrize("purchase_qty,used_qty", [(0, 1), (-1, 1), (1, 0), (1, -2)])
    def test_non_positive_quantities(self, purchase_qty: float, used_qty: float) -> None:
        with pytest.raises(InvalidQuantityError):
            ingredient_usage_cost(10, purchase_qty, "kg", 100, used_qty, "kg")

    def test_negative_price(self) -> None:
        with pytest.raises(NegativePriceError) as exc_info:
            ingredient_usage_cost(-1, 1, "kg", 100, 1, "kg")
        assert exc_info.value.price == -1

    def test_incompatible_units(self) -> None:
        with pytest.raises(IncompatibleUnitsError) as exc_info:
            ingredient_usage_cost(10, 1, "kg", 100, 1, "ml")
        assert "kg" in str(exc_info.value)
        assert "ml" in str(exc_info.value)

    def test_yield_checked_before_quantities(self) -> None:
        with pytest.raises(InvalidYieldError):
            ingredient_usage_cost(-1, 0, "kg", 0, 0, "l")

    def test_quantities_checked_before_price(self) -> None:
        with pytest.raises(InvalidQuantityError):
            ingredient_usage_cost(-1, 0, "kg", 50, 1, "l")

    def test_price_checked_before_units(self) -> None:
        with pytest.raises(NegativePriceError):
            ingredient_usage_cost(-1, 1, "kg", 50, 1, "l")

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(FoodCostError):
            ingredient_usage_cost(-1, 1, "kg", 100, 1, "kg")

    def test_monotonic_in_used_quantity(self) -> None:
        costs = [ingredient_usage_cost(200, 2, "kg", 75, q, "g") for q in (10, 100, 250, 1000)]
        assert costs == sorted(costs)
        assert len(set(costs)) == len(costs)

    def test_from_objects(self) -> None:
        item = RecipeItem(ingredient_id="chicken", used_quantity=500, used_unit="g")
        assert ingredient_cost(_chicken(), item) == 125


class TestEffectiveCostPerUnit:
    def test_per_usable_kilogram(self) -> None:
        ingredient = _chicken().model_copy(update={"price_per_unit": 10})
        assert effective_cost_per_unit(ingredient, "kg") == pytest.approx(12.5)

    def test_per_usable_gram(self) -> None:
        ingredient = _chicken().model_copy(update={"price_per_unit": 10})
        assert effective_cost_per_unit(ingredient, "g") == pytest.approx(0.0125)

    def test_incompatible_target(self) -> None:
        with pytest.raises(IncompatibleUnitsError):
            effective_cost_per_unit(_chicken(), "pcs")


class TestRecipeTotalCost:
    def test_sums_resolved_items(self) -> None:
        lookup = {"chicken": _chicken(), "milk": _milk()}
        items = [
            RecipeItem(ingredient_id="chicken", used_quantity=500, used_unit="g"),
            RecipeItem(ingredient_id="milk", used_quantity=200, used_unit="ml"),
        ]
        assert recipe_total_cost(items, lookup) == pytest.approx(125 + 10)

    def test_empty_items(self) -> None:
        assert recipe_total_cost([], {}) == 0

    def test_missing_ingredient_contributes_zero(self) -> None:
        items = [RecipeItem(ingredient_id="missing", used_quantity=1, used_unit="kg")]
        assert recipe_total_cost(items, {}) == 0

    def test_mixed_list_sums_only_resolved(self) -> None:
        items = [
            RecipeItem(ingredient_id="chicken", used_quantity=500, used_unit="g"),
            RecipeItem(ingredient_id="missing", used_quantity=1, used_unit="kg"),
        ]
        assert recipe_total_cost(items, {"chicken": _chicken()}) == 125

    def test_callable_lookup(self) -> None:
        items = [RecipeItem(ingredient_id="milk", used_quantity=1, used_unit="l")]
        assert recipe_total_cost(items, lambda _id: _milk()) == pytest.approx(50)

    def test_incompatible_line_raises(self) -> None:
        items = [RecipeItem(ingredient_id="chicken", used_quantity=1, used_unit="l")]
        with pytest.raises(IncompatibleUnitsError):
            recipe_total_cost(items, {"chicken": _chicken()})


class TestRecipeCostBreakdown:
    def test_lines_and_missing(self) -> None:
        items = [
            RecipeItem(ingredient_id="chicken", used_quantity=500, used_unit="g"),
            RecipeItem(ingredient_id="gone", used_quantity=1, used_unit="kg"),
            RecipeItem(ingredient_id="milk", used_quantity=500, used_unit="ml"),
        ]
        breakdown = recipe_cost_breakdown(items, {"chicken": _chicken(), "milk": _milk()})

        assert [line.ingredient_id for line in breakdown.lines] == ["chicken", "milk"]
        assert breakdown.lines[0].ingredient_name == "Chicken breast"
        assert breakdown.missing_ingredient_ids == ["gone"]
        assert not breakdown.is_complete
        assert breakdown.total_cost == pytest.approx(150)

    def test_share_of(self) -> None:
        items = [
            RecipeItem(ingredient_id="chicken", used_quantity=500, used_unit="g"),
            RecipeItem(ingredient_id="milk", used_quantity=500, used_unit="ml"),
        ]
        breakdown = recipe_cost_breakdown(items, {"chicken": _chicken(), "milk": _milk()})
        shares = [breakdown.share_of(line) for line in breakdown.lines]
        assert shares[0] == pytest.approx(125 / 150 * 100)
        assert sum(shares) == pytest.approx(100)

    def test_empty_is_complete(self) -> None:
        breakdown = recipe_cost_breakdown([], {})
        assert breakdown.is_complete
        assert breakdown.total_cost == 0


class TestProfitability:
    def test_food_cost_percentage(self) -> None:
        assert food_cost_percentage(30, 100) == pytest.approx(30)

    @pytest.mark.parametrize("total", [0, 12.5, 1000])
    def test_food_cost_percentage_unpriced(self, total: float) -> None:
        assert food_cost_percentage(total, 0) == 0

    def test_food_cost_percentage_can_exceed_100(self) -> None:
        assert food_cost_percentage(150, 100) == pytest.approx(150)

    def test_cost_per_serving(self) -> None:
        assert cost_per_serving(125, 4) == pytest.approx(31.25)
        assert cost_per_serving(125, 0) == 0

    def test_gross_profit(self) -> None:
        assert gross_profit(350, 125) == 225
        assert gross_profit(100, 150) == -50

    def test_gross_profit_margin(self) -> None:
        assert gross_profit_margin(200, 50) == pytest.approx(75)
        assert gross_profit_margin(0, 50) == 0


class TestFoodCostStatus:
    def test_unpriced(self) -> None:
        assert food_cost_status(0, 0) == FoodCostStatus.UNPRICED

    def test_bands(self) -> None:
        assert food_cost_status(20, 100) == FoodCostStatus.LOW
        assert food_cost_status(28, 100) == FoodCostStatus.IDEAL
        assert food_cost_status(35, 100) == FoodCostStatus.IDEAL
        assert food_cost_status(40, 100) == FoodCostStatus.HIGH

    def test_custom_thresholds(self) -> None:
        assert food_cost_status(40, 100, low_pct=30, high_pct=45) == FoodCostStatus.IDEAL

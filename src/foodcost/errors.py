"""
Errors raised by the cost calculation engine and the recipe book.

All engine errors derive from ``FoodCostError`` (itself a ``ValueError``) so
form-level callers can catch one type and show a field message.
"""

from __future__ import annotations

from foodcost.units import Unit, UnitLike, type_of


class FoodCostError(ValueError):
    """Base class for food cost calculation failures."""


class IncompatibleUnitsError(FoodCostError):
    """Conversion attempted across unit families (e.g. weight vs. volume)."""

    def __init__(self, from_unit: UnitLike, to_unit: UnitLike) -> None:
        self.from_unit = Unit(from_unit)
        self.to_unit = Unit(to_unit)
        self.from_type = type_of(self.from_unit)
        self.to_type = type_of(self.to_unit)
        super().__init__(
            f"Cannot convert between incompatible units: "
            f"{self.from_unit.value} ({self.from_type.value}) and "
            f"{self.to_unit.value} ({self.to_type.value})"
        )


class InvalidYieldError(FoodCostError):
    """Yield percentage outside (0, 100]."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"Yield percentage must be between 0 and 100, got {value}")


class InvalidQuantityError(FoodCostError):
    """A purchase or usage quantity is zero or negative."""

    def __init__(self, purchase_quantity: float, used_quantity: float) -> None:
        self.purchase_quantity = purchase_quantity
        self.used_quantity = used_quantity
        super().__init__(
            f"Quantities must be greater than 0 "
            f"(purchase={purchase_quantity}, used={used_quantity})"
        )


class NegativePriceError(FoodCostError):
    """A price is negative."""

    def __init__(self, price: float) -> None:
        self.price = price
        super().__init__(f"Price cannot be negative, got {price}")


class NotFoundError(KeyError):
    """A record id is unknown to a repository."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")

    def __str__(self) -> str:
        return str(self.args[0])

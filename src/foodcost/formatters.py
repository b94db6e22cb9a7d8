"""Display strings for the numbers the calculation engine returns."""

from __future__ import annotations

import math

from foodcost.units import UnitLike, metadata_of


def format_currency(amount: float, symbol: str = "฿", decimals: int = 2) -> str:
    """``1234.56`` -> ``฿1,234.56``; non-finite amounts render as a dash."""
    if not math.isfinite(amount):
        return f"{symbol}—"
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    if not math.isfinite(value):
        return "—"
    return f"{value:.{decimals}f}%"


def format_quantity(quantity: float, unit: UnitLike, label: bool = False) -> str:
    """``500, "g"`` -> ``500 g``; trailing zeros are dropped."""
    text = f"{quantity:,.3f}".rstrip("0").rstrip(".")
    meta = metadata_of(unit)
    return f"{text} {meta.label if label else meta.unit.value}"

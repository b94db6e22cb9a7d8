"""
Unit Model — measurement units, their families and conversion factors.

Each unit belongs to exactly one family (weight, volume, quantity) and carries
a factor that converts a quantity in that unit to the family's base unit
(kg, l, pcs). The metadata table is built once at import and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class UnitType(str, Enum):
    """Measurement families."""

    WEIGHT = "weight"
    VOLUME = "volume"
    QUANTITY = "quantity"


class Unit(str, Enum):
    """Units of measurement."""

    # Weight
    KILOGRAM = "kg"
    GRAM = "g"

    # Volume
    LITER = "l"
    MILLILITER = "ml"

    # Count
    PIECES = "pcs"


UnitLike = Union[Unit, str]


@dataclass(frozen=True)
class UnitMetadata:
    """Display and conversion attributes of a unit."""

    unit: Unit
    type: UnitType
    label: str
    conversion_factor: float  # multiply to get the family's base unit


UNIT_METADATA: Mapping[Unit, UnitMetadata] = MappingProxyType({
    Unit.KILOGRAM: UnitMetadata(Unit.KILOGRAM, UnitType.WEIGHT, "Kilogram", 1),
    Unit.GRAM: UnitMetadata(Unit.GRAM, UnitType.WEIGHT, "Gram", 0.001),
    Unit.LITER: UnitMetadata(Unit.LITER, UnitType.VOLUME, "Liter", 1),
    Unit.MILLILITER: UnitMetadata(Unit.MILLILITER, UnitType.VOLUME, "Milliliter", 0.001),
    Unit.PIECES: UnitMetadata(Unit.PIECES, UnitType.QUANTITY, "Pieces", 1),
})

BASE_UNITS: Mapping[UnitType, Unit] = MappingProxyType({
    UnitType.WEIGHT: Unit.KILOGRAM,
    UnitType.VOLUME: Unit.LITER,
    UnitType.QUANTITY: Unit.PIECES,
})


def metadata_of(unit: UnitLike) -> UnitMetadata:
    """Return the metadata for a unit (accepts the enum or its string value)."""
    return UNIT_METADATA[Unit(unit)]


def type_of(unit: UnitLike) -> UnitType:
    """Return the family a unit belongs to."""
    return metadata_of(unit).type


def are_compatible(unit_a: UnitLike, unit_b: UnitLike) -> bool:
    """True when both units belong to the same family."""
    return type_of(unit_a) == type_of(unit_b)


def is_weight_unit(unit: UnitLike) -> bool:
    return type_of(unit) == UnitType.WEIGHT


def is_volume_unit(unit: UnitLike) -> bool:
    return type_of(unit) == UnitType.VOLUME


def is_quantity_unit(unit: UnitLike) -> bool:
    return type_of(unit) == UnitType.QUANTITY


def units_of_type(unit_type: UnitType | str) -> list[Unit]:
    """Units of one family, in declaration order."""
    wanted = UnitType(unit_type)
    return [meta.unit for meta in UNIT_METADATA.values() if meta.type == wanted]

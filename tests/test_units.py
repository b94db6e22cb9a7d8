"""Tests for the unit model."""

import pytest

from foodcost.units import (
    BASE_UNITS,
    UNIT_METADATA,
    Unit,
    UnitType,
    are_compatible,
    is_quantity_unit,
    is_volume_unit,
    is_weight_unit,
    metadata_of,
    type_of,
    units_of_type,
)


class TestMetadata:
    def test_every_unit_has_metadata(self) -> None:
        assert set(UNIT_METADATA) == set(Unit)
        for unit in Unit:
            assert metadata_of(unit).unit == unit

    def test_base_units_have_factor_one(self) -> None:
        for unit in BASE_UNITS.values():
            assert metadata_of(unit).conversion_factor == 1

    def test_gram_and_milliliter_factors(self) -> None:
        assert metadata_of(Unit.GRAM).conversion_factor == 0.001
        assert metadata_of(Unit.MILLILITER).conversion_factor == 0.001

    def test_labels(self) -> None:
        assert metadata_of("kg").label == "Kilogram"
        assert metadata_of("pcs").label == "Pieces"

    def test_accepts_string_values(self) -> None:
        assert metadata_of("ml") is UNIT_METADATA[Unit.MILLILITER]

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(ValueError):
            metadata_of("oz")

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            UNIT_METADATA[Unit.GRAM] = UNIT_METADATA[Unit.KILOGRAM]  # type: ignore[index]


class TestTypes:
    def test_type_of(self) -> None:
        assert type_of("kg") == UnitType.WEIGHT
        assert type_of("g") == UnitType.WEIGHT
        assert type_of("l") == UnitType.VOLUME
        assert type_of("ml") == UnitType.VOLUME
        assert type_of("pcs") == UnitType.QUANTITY

    def test_compatible_within_family(self) -> None:
        assert are_compatible("kg", "g")
        assert are_compatible(Unit.LITER, Unit.MILLILITER)
        assert are_compatible("pcs", "pcs")

    def test_incompatible_across_families(self) -> None:
        assert not are_compatible("kg", "l")
        assert not are_compatible("ml", "pcs")
        assert not are_compatible("g", "pcs")

    def test_type_guards(self) -> None:
        assert is_weight_unit("g")
        assert not is_weight_unit("ml")
        assert is_volume_unit("l")
        assert is_quantity_unit("pcs")

    def test_units_of_type(self) -> None:
        assert units_of_type(UnitType.WEIGHT) == [Unit.KILOGRAM, Unit.GRAM]
        assert units_of_type("volume") == [Unit.LITER, Unit.MILLILITER]
        assert units_of_type("quantity") == [Unit.PIECES]

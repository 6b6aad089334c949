from __future__ import annotations

from decimal import Decimal

from comboshop.models import PackOption
from comboshop.pricing import ComboTotals, compute_totals, discount_factor, energy_drink_quantity, format_brl

from conftest import fill_complete


def test_incomplete_selection_prices_zero(selection, snapshot):
    selection.select_spirit(snapshot.product_by_id("gin-1"))
    totals = compute_totals(selection)
    assert totals == ComboTotals()
    assert totals.is_zero


def test_scenario_can_pack_and_four_ice(selection, snapshot):
    fill_complete(selection, snapshot)
    totals = compute_totals(selection)
    assert totals.original == Decimal("86.00")
    assert totals.discounted == Decimal("81.70")
    assert totals.discount == Decimal("4.30")


def test_large_bottle_multiplier_is_one(selection, snapshot):
    fill_complete(selection, snapshot)
    selection.select_pack_option(PackOption.single_large_bottle())
    selection.select_energy_drink(snapshot.product_by_id("rb-2l"))
    totals = compute_totals(selection)
    # 50 + 30 + 4 * 3
    assert totals.original == Decimal("92.00")
    assert totals.discounted == Decimal("87.40")


def test_bulk_bag_counts_one_unit_per_slot(selection, snapshot):
    fill_complete(selection, snapshot)
    selection.select_ice(3, None)
    selection.select_ice(3, snapshot.product_by_id("gelo-saco"))
    # 50 + 24 + 3 * 3 + 15
    assert compute_totals(selection).original == Decimal("98.00")


def test_discount_law_has_no_drift(selection, snapshot):
    fill_complete(selection, snapshot)
    first = compute_totals(selection)
    for _ in range(100):
        assert compute_totals(selection) == first
    assert first.discounted == (first.original * Decimal("0.95")).quantize(Decimal("0.01"))


def test_energy_drink_quantity():
    assert energy_drink_quantity(PackOption.single_large_bottle()) == 1
    assert energy_drink_quantity(PackOption.multi_can_pack(5)) == 5


def test_discount_factor():
    assert discount_factor(5) == Decimal("0.95")
    assert discount_factor(0) == Decimal("1")


def test_format_brl():
    assert format_brl(Decimal("81.7")) == "R$ 81,70"
    assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_brl(Decimal("0")) == "R$ 0,00"
    assert format_brl(Decimal("-4.30")) == "-R$ 4,30"

"""Combo quantities, totals and currency formatting."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from comboshop.config import CURRENCY_SYMBOL, DISCOUNT_PERCENT
from comboshop.models import PackOption
from comboshop.selection import ComboSelection

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Quantity each filled ice slot contributes, bulk bags included.
ICE_UNITS_PER_SLOT = 1


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def discount_factor(percent: int = DISCOUNT_PERCENT) -> Decimal:
    return (Decimal(100) - Decimal(percent)) / Decimal(100)


def energy_drink_quantity(option: PackOption) -> int:
    return option.size


@dataclass(frozen=True)
class ComboTotals:
    original: Decimal = ZERO
    discounted: Decimal = ZERO

    @property
    def discount(self) -> Decimal:
        return self.original - self.discounted

    @property
    def is_zero(self) -> bool:
        return self.original == ZERO and self.discounted == ZERO


def compute_totals(selection: ComboSelection, percent: int = DISCOUNT_PERCENT) -> ComboTotals:
    """Original and discounted combo price; both zero until the selection is complete."""
    spirit, energy_drink = selection.spirit, selection.energy_drink
    if spirit is None or energy_drink is None or not selection.is_complete():
        return ComboTotals()

    original = spirit.sale_price
    original += energy_drink.sale_price * energy_drink_quantity(selection.pack_option)
    for ice in selection.filled_ice:
        original += ice.sale_price * ICE_UNITS_PER_SLOT

    original = quantize_money(original)
    return ComboTotals(original=original, discounted=quantize_money(original * discount_factor(percent)))


def format_brl(amount: Decimal) -> str:
    """Format as ``R$ 1.234,56``."""
    quantized = quantize_money(amount)
    sign = "-" if quantized < 0 else ""
    grouped = f"{abs(quantized):,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {localized}"

"""Rendering helpers for products, cart lines and combo totals."""

from __future__ import annotations

from typing import Sequence

from rich.text import Text

from comboshop.constant import PACK_OPTION_LABELS, SOLD_OUT_LABEL
from comboshop.models import CartLine, ComboCartLine, ComboRecord, PackOption, Product
from comboshop.pricing import ComboTotals, format_brl


def badge_style(kind: str) -> str:
    """Return a consistent badge style for combo sections."""
    if kind == "spirit":
        return "bold #ffffff on #b23a48"
    if kind == "energy":
        return "bold #ffffff on #2f6db5"
    if kind == "ice":
        return "bold #0b1f0f on #8fd3f4"
    return "bold #0b1f0f on #5fbf72"


def pack_option_label(option: PackOption) -> str:
    return PACK_OPTION_LABELS[option.kind].format(size=option.size)


def format_product_row(product: Product, *, pointer: bool, selected: bool, multiplier: int = 1) -> Text:
    """One picker row: pointer, checkbox, name and unit price."""
    text = Text(style="white")
    text.append("➤ " if pointer else "  ")
    text.append("[x] " if selected else "[ ] ", style="bold white" if selected else "white")
    text.append(product.name, style="bold white" if selected else "white")
    text.append(f"  {format_brl(product.sale_price)}", style="dim")
    if multiplier > 1:
        text.append(f" x{multiplier}", style="dim")
    return text


def format_combo_summary(combo: ComboRecord) -> Text:
    text = Text()
    text.append("COMBO", style=badge_style("combo"))
    text.append(f" -{combo.discount_percent}% ")
    text.append(combo.spirit.product.name)
    text.append("\n      ")
    text.append(f"{combo.energy_drink.quantity}x {combo.energy_drink.product.name}", style="dim")
    for line in combo.ice:
        text.append("\n      ")
        text.append(f"{line.quantity}x {line.product.name}", style="dim")
    return text


def format_cart_line(line: CartLine) -> Text:
    """Render a cart row with its line total."""
    text = Text()
    if isinstance(line, ComboCartLine):
        text.append_text(format_combo_summary(line.combo))
    else:
        text.append(f"{line.quantity}x {line.product.name}")
    text.append(f"  {format_brl(line.line_total)}", style="bold")
    return text


def format_totals(totals: ComboTotals, percent: int) -> Text:
    text = Text(style="white")
    text.append("Subtotal: ")
    text.append(format_brl(totals.original), style="strike")
    text.append(f"\nDiscount ({percent}%): ")
    text.append(f"- {format_brl(totals.discount)}", style="#5fbf72")
    text.append("\nCombo total: ")
    text.append(format_brl(totals.discounted), style="bold")
    return text


def format_special_drink_row(product: Product, *, pointer: bool, in_cart: int = 0) -> Text:
    """Special drinks row; stocked drinks with nothing left are marked sold out."""
    text = Text(style="white")
    text.append("➤ " if pointer else "  ")
    text.append(product.name)
    text.append(f"  {format_brl(product.sale_price)}", style="dim")
    if not product.is_prepared and product.stock <= 0:
        text.append(f"  {SOLD_OUT_LABEL}", style="dim italic")
    if in_cart:
        text.append(f"  ({in_cart} in cart)", style="bold")
    return text


def rendered_height(text: Text) -> int:
    return text.plain.count("\n") + 1


def cart_window(heights: Sequence[int], rows: int, selected: int | None) -> tuple[int, int]:
    """Pick the slice of cart lines that fits ``rows`` terminal rows.

    Lines have different heights (a combo spans one row per component), so the
    budget is spent in rendered rows. The selected line is always part of the
    window, with up to half of the spare rows given to the lines before it.
    """
    total = len(heights)
    if total == 0:
        return (0, 0)
    rows = max(1, rows)
    if sum(heights) <= rows:
        return (0, total)

    anchor = 0 if selected is None else min(max(selected, 0), total - 1)
    start, end = anchor, anchor + 1
    used = heights[anchor]

    before = (rows - used) // 2
    while start > 0 and heights[start - 1] <= before:
        start -= 1
        used += heights[start]
        before -= heights[start]
    while end < total and used + heights[end] <= rows:
        used += heights[end]
        end += 1
    # Near the bottom of the cart, give leftover rows back to earlier lines.
    while start > 0 and used + heights[start - 1] <= rows:
        start -= 1
        used += heights[start]
    return (start, end)

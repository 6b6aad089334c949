"""Session cart that receives assembled combos and plain products."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from comboshop.models import CartLine, ComboCartLine, ComboRecord, ItemLine, Product
from comboshop.notifications import OUT_OF_STOCK_MESSAGE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartAddResult:
    ok: bool
    reason: str = ""


class Cart:
    """In-memory cart for one session."""

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0.00"))

    def add_combo(self, combo: ComboRecord) -> ComboCartLine:
        if any(isinstance(line, ComboCartLine) and line.combo.combo_id == combo.combo_id for line in self._lines):
            raise ValueError(f"Combo {combo.combo_id} is already in the cart")
        line = ComboCartLine(line_id=uuid4().hex, combo=combo)
        self._lines.append(line)
        logger.info("cart add_combo combo_id=%s total=%s", combo.combo_id, combo.discounted_total)
        return line

    def quantity_of(self, product_id: str) -> int:
        return sum(
            line.quantity for line in self._lines if isinstance(line, ItemLine) and line.product.product_id == product_id
        )

    def add_item(self, product: Product) -> CartAddResult:
        """Add one unit. Non-prepared products are capped at their stock."""
        if not product.is_prepared:
            in_cart = self.quantity_of(product.product_id)
            if product.stock <= 0 or in_cart >= product.stock:
                logger.info(
                    "cart add_item rejected product_id=%s stock=%d in_cart=%d", product.product_id, product.stock, in_cart
                )
                return CartAddResult(ok=False, reason=OUT_OF_STOCK_MESSAGE.format(name=product.name))

        for line in self._lines:
            if isinstance(line, ItemLine) and line.product.product_id == product.product_id:
                line.quantity += 1
                break
        else:
            self._lines.append(ItemLine(line_id=uuid4().hex, product=product))
        logger.info("cart add_item product_id=%s", product.product_id)
        return CartAddResult(ok=True)

    def update_quantity(self, line_id: str, quantity: int) -> None:
        """Set the quantity of an item line; zero or less removes it."""
        for line in self._lines:
            if line.line_id != line_id:
                continue
            if isinstance(line, ComboCartLine):
                raise ValueError("Combo lines have a fixed quantity")
            if not line.product.is_prepared:
                quantity = min(quantity, line.product.stock)
            if quantity <= 0:
                self.remove(line_id)
                return
            line.quantity = quantity
            logger.debug("cart update_quantity line_id=%s quantity=%d", line_id, quantity)
            return
        raise KeyError(line_id)

    def remove(self, line_id: str) -> None:
        before = len(self._lines)
        self._lines = [line for line in self._lines if line.line_id != line_id]
        if len(self._lines) == before:
            raise KeyError(line_id)
        logger.info("cart remove line_id=%s", line_id)

    def clear(self) -> None:
        self._lines.clear()

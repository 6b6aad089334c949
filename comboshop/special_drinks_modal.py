"""Special drinks modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from comboshop.cart import Cart
from comboshop.catalog import CatalogSnapshot
from comboshop.models import Product
from comboshop.notifications import ITEM_ADDED_MESSAGE, ITEM_ADDED_TITLE, OUT_OF_STOCK_TITLE, Notifier
from comboshop.rendering import badge_style, format_special_drink_row
from comboshop.special_drinks import default_category_id, drinks_in_category, special_categories


class SpecialDrinksModal(ModalScreen[None]):
    """Browse the house special drinks by category and add them to the cart."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "add_current", "Add to cart"),
    ]

    CSS = """
    SpecialDrinksModal {
        align: center middle;
        background: $background 60%;
    }

    #special-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #special-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #special-categories {
        margin-bottom: 1;
    }

    #special-body {
        color: white;
    }

    #special-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, cart: Cart, notifier: Notifier, snapshot: CatalogSnapshot | None = None) -> None:
        super().__init__()
        self.cart = cart
        self.notifier = notifier
        self.snapshot = snapshot
        self.category_id = default_category_id(snapshot) if snapshot is not None else None

    def compose(self) -> ComposeResult:
        with Container(id="special-dialog"):
            yield Static("House Special Drinks", id="special-title")
            yield Static(id="special-categories")
            yield Static(id="special-body")
            yield Static("←/→ category, J/K/↑/↓ move, Enter add, Esc/q close", id="special-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def catalog_ready(self, snapshot: CatalogSnapshot) -> None:
        if self.snapshot is None:
            self.snapshot = snapshot
            self.category_id = default_category_id(snapshot)
            self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()

    def action_cycle_category(self, delta: int) -> None:
        if self.snapshot is None:
            return
        ids = [c.category_id for c in special_categories(self.snapshot)]
        if not ids:
            return
        idx = ids.index(self.category_id) if self.category_id in ids else 0
        self.category_id = ids[(idx + delta) % len(ids)]
        self.cursor_index = 0
        self._refresh_content()

    def action_move_cursor(self, delta: int) -> None:
        drinks = self._drinks()
        if not drinks:
            return
        self.cursor_index = (self.cursor_index + delta) % len(drinks)
        self._refresh_content()

    def action_add_current(self) -> None:
        drinks = self._drinks()
        if not drinks:
            return
        product = drinks[min(self.cursor_index, len(drinks) - 1)]
        result = self.cart.add_item(product)
        if result.ok:
            self.notifier.success(ITEM_ADDED_TITLE, ITEM_ADDED_MESSAGE.format(name=product.name))
        else:
            self.notifier.error(OUT_OF_STOCK_TITLE, result.reason)
        self._refresh_content()

    def _drinks(self) -> list[Product]:
        if self.snapshot is None:
            return []
        return drinks_in_category(self.snapshot, self.category_id)

    def _refresh_content(self) -> None:
        try:
            tabs = self.query_one("#special-categories", Static)
            body = self.query_one("#special-body", Static)
        except NoMatches:
            return

        if self.snapshot is None:
            tabs.update("")
            body.update("Loading catalog...")
            return

        tab_text = Text()
        for idx, category in enumerate(special_categories(self.snapshot)):
            if idx > 0:
                tab_text.append(" ")
            style = badge_style("combo") if category.category_id == self.category_id else "dim"
            tab_text.append(f" {category.name} ", style=style)
        tabs.update(tab_text)

        drinks = self._drinks()
        if not drinks:
            body.update("No special drinks available right now.")
            return
        if self.cursor_index >= len(drinks):
            self.cursor_index = len(drinks) - 1

        content = Text(style="white")
        content.append(f"{self.cursor_index + 1} of {len(drinks)}\n", style="dim")
        for idx, product in enumerate(drinks):
            content.append("\n")
            content.append_text(
                format_special_drink_row(
                    product,
                    pointer=idx == self.cursor_index,
                    in_cart=self.cart.quantity_of(product.product_id),
                )
            )
        body.update(content)

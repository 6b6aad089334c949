"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from comboshop.assembler import ComboAssembler
from comboshop.cart import Cart
from comboshop.catalog import CatalogError, CatalogSnapshot, CatalogSource, SqliteCatalogSource, load_snapshot
from comboshop.classifier import ComboCandidates, classify_catalog
from comboshop.combo_modal import ComboModal
from comboshop.models import CartLine, ComboCartLine, ComboRecord
from comboshop.notifications import ToastNotifier
from comboshop.pricing import format_brl
from comboshop.rendering import cart_window, format_cart_line, rendered_height
from comboshop.special_drinks_modal import SpecialDrinksModal

logger = logging.getLogger(__name__)

DEFAULT_CART_ROWS = 8


class ComboShopApp(App):
    """A Textual app for building discounted combos and managing the cart."""

    TITLE = "Combo Shop"
    SUB_TITLE = "Spirit + Energy + Ice"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #status-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-total {
        margin-top: 1;
        text-style: bold;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    cart_selected_index = reactive(None)

    BINDINGS = [
        ("c", "open_combo", "Build combo"),
        ("s", "open_special_drinks", "Special drinks"),
        ("j", "move_cart_selection(1)", "Next line"),
        ("k", "move_cart_selection(-1)", "Previous line"),
        ("down", "move_cart_selection(1)", "Next line"),
        ("up", "move_cart_selection(-1)", "Previous line"),
        ("plus", "change_quantity(1)", "More"),
        ("minus", "change_quantity(-1)", "Less"),
        ("d", "delete_selected", "Remove line"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, source: CatalogSource | None = None) -> None:
        super().__init__()
        self.source: CatalogSource = source or SqliteCatalogSource()
        self.cart = Cart()
        self.notifier = ToastNotifier(self)
        self.assembler = ComboAssembler(self.cart, self.notifier)
        self.snapshot: CatalogSnapshot | None = None
        self.candidates: ComboCandidates | None = None
        self.system_status = "Loading catalog..."
        logger.debug("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="cart-total")
            with Vertical(id="status-pane"):
                yield Static(id="status-bar")
                yield Static(id="catalog-info")

    def on_mount(self) -> None:
        self._refresh_all()
        self.load_catalog()

    def on_key(self, event: Key) -> None:
        logger.debug("on_key key=%r screen=%s", event.key, type(self.screen).__name__)

    @work(thread=True, exclusive=True)
    def load_catalog(self) -> None:
        """Fetch the catalog snapshot once for this session."""
        try:
            snapshot = load_snapshot(self.source)
        except CatalogError as exc:
            logger.error("catalog load failed error=%s", exc)
            self.call_from_thread(self._catalog_failed, str(exc))
            return
        self.call_from_thread(self._catalog_loaded, snapshot)

    def _catalog_loaded(self, snapshot: CatalogSnapshot) -> None:
        self.snapshot = snapshot
        self.candidates = classify_catalog(snapshot)
        self.system_status = "Catalog ready"
        self._notify_open_screens()
        self._refresh_all()

    def _catalog_failed(self, message: str) -> None:
        self._catalog_loaded(CatalogSnapshot())
        self.system_status = f"Catalog unavailable: {message}"
        self._refresh_status()

    def _notify_open_screens(self) -> None:
        if self.snapshot is None or self.candidates is None:
            return
        for screen in self.screen_stack:
            if isinstance(screen, ComboModal):
                screen.catalog_ready(self.candidates)
            elif isinstance(screen, SpecialDrinksModal):
                screen.catalog_ready(self.snapshot)

    # Actions

    def action_open_combo(self) -> None:
        if not self._on_main_screen():
            return
        self.push_screen(ComboModal(self.assembler, self.candidates), callback=self._combo_closed)

    def action_open_special_drinks(self) -> None:
        if not self._on_main_screen():
            return
        self.push_screen(SpecialDrinksModal(self.cart, self.notifier, self.snapshot), callback=self._special_closed)

    def action_move_cart_selection(self, delta: int) -> None:
        lines = self.cart.lines
        if not lines or not self._on_main_screen():
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(lines)
        self._refresh_cart()

    def action_change_quantity(self, delta: int) -> None:
        line = self._selected_line()
        if line is None or isinstance(line, ComboCartLine) or not self._on_main_screen():
            return
        self.cart.update_quantity(line.line_id, line.quantity + delta)
        self._refresh_cart()

    def action_delete_selected(self) -> None:
        line = self._selected_line()
        if line is None or not self._on_main_screen():
            return
        self.cart.remove(line.line_id)
        self._refresh_cart()

    # Helpers

    def _on_main_screen(self) -> bool:
        return not isinstance(self.screen, (ComboModal, SpecialDrinksModal))

    def _combo_closed(self, record: ComboRecord | None) -> None:
        if record is not None:
            self.system_status = f"Combo {record.combo_id} added"
            self.cart_selected_index = len(self.cart.lines) - 1
        self._refresh_all()

    def _special_closed(self, _: None) -> None:
        self._refresh_all()

    def _selected_line(self) -> CartLine | None:
        lines = self.cart.lines
        if self.cart_selected_index is None:
            return None
        if not (0 <= self.cart_selected_index < len(lines)):
            return None
        return lines[self.cart_selected_index]

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_status()

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            total_widget = self.query_one("#cart-total", Static)
        except NoMatches:
            return

        lines = self.cart.lines
        total_widget.update(f"Total: {format_brl(self.cart.total)}")
        if not lines:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        rendered = [format_cart_line(line) for line in lines]
        rows = cart_widget.size.height or DEFAULT_CART_ROWS
        start, end = cart_window([rendered_height(t) for t in rendered], rows, self.cart_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            text.append(pointer)
            text.append(f"{idx + 1}. ")
            text.append_text(rendered[idx])

        if end < len(lines):
            text.append("\n⋮", style="dim")

        cart_widget.update(text)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
            info = self.query_one("#catalog-info", Static)
        except NoMatches:
            return
        bar.update(f"C build combo, S special drinks, J/K move, +/- qty, D remove.\n{self.system_status}")

        if self.candidates is None or self.snapshot is None:
            info.update("")
            return
        if self.snapshot.is_empty:
            info.update("No products in the catalog.")
            return
        info.update(
            f"Spirits: {len(self.candidates.spirits)}\n"
            f"Energy 2L: {len(self.candidates.large_bottles)}\n"
            f"Energy cans: {len(self.candidates.can_packs)}\n"
            f"Ice: {len(self.candidates.ice)}"
        )

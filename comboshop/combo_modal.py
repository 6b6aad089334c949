"""Combo configurator modal screen."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from comboshop.assembler import ComboAssembler
from comboshop.classifier import ComboCandidates, filter_by_name
from comboshop.config import CAN_PACK_SIZE, DISCOUNT_PERCENT, ICE_SLOT_COUNT
from comboshop.models import ComboRecord, PackOption, Product
from comboshop.pricing import compute_totals
from comboshop.rendering import badge_style, format_product_row, format_totals, pack_option_label
from comboshop.selection import ComboSelection

logger = logging.getLogger(__name__)

SPIRIT_SECTION = "spirit"
ENERGY_SECTION = "energy"
ICE_SECTION_PREFIX = "ice"


class ComboModal(ModalScreen[ComboRecord | None]):
    """Centered modal to build a discounted combo from the catalog."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("tab", "move_section(1)", "Next section"),
        ("shift+tab", "move_section(-1)", "Previous section"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("left", "cycle_option(-1)", "Previous option"),
        ("right", "cycle_option(1)", "Next option"),
        ("p", "cycle_option(1)", "Pack option"),
        ("enter", "toggle_current", "Toggle"),
        ("slash", "start_search", "Search"),
        ("ctrl+s", "confirm", "Add combo"),
    ]

    CSS = """
    ComboModal {
        align: center middle;
        background: $background 60%;
    }

    #combo-dialog {
        width: 80;
        height: auto;
        max-height: 95%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #combo-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #combo-sections {
        margin-bottom: 1;
        color: white;
    }

    #combo-body {
        margin-bottom: 1;
        color: white;
    }

    #combo-totals {
        border-top: solid $secondary;
        padding-top: 1;
    }

    #combo-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    section_index = reactive(0)

    def __init__(
        self,
        assembler: ComboAssembler,
        candidates: ComboCandidates | None = None,
        ice_slot_count: int = ICE_SLOT_COUNT,
        can_pack_size: int = CAN_PACK_SIZE,
    ) -> None:
        super().__init__()
        self.assembler = assembler
        self.ice_slot_count = ice_slot_count
        self.pack_options = (PackOption.single_large_bottle(), PackOption.multi_can_pack(can_pack_size))
        self.selection: ComboSelection | None = None
        self.typing_search = False
        self.search_query = ""
        if candidates is not None:
            self.selection = ComboSelection(candidates, ice_slot_count)

    def compose(self) -> ComposeResult:
        with Container(id="combo-dialog"):
            yield Static(f"Build Your Combo - {DISCOUNT_PERCENT}% OFF", id="combo-title")
            yield Static(id="combo-sections")
            yield Static(id="combo-body")
            yield Static(id="combo-totals")
            yield Static(id="combo-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def catalog_ready(self, candidates: ComboCandidates) -> None:
        """Leave the loading state once the catalog snapshot has arrived."""
        if self.selection is None:
            self.selection = ComboSelection(candidates, self.ice_slot_count)
            self._refresh_content()

    def on_key(self, event: Key) -> None:
        if not self.typing_search:
            return

        if event.key == "escape":
            self.typing_search = False
            self.search_query = ""
            self.cursor_index = 0
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self.typing_search = False
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            if self.search_query:
                self.search_query = self.search_query[:-1]
            self.cursor_index = 0
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.search_query += event.character
            self.cursor_index = 0
            self._refresh_content()
            event.stop()
            return

        # Ignore all non-text keys while typing.
        event.stop()

    # Actions

    def action_close(self) -> None:
        if self.typing_search:
            return
        if self.selection is not None:
            self.selection.reset()
        logger.debug("combo modal closed without confirming")
        self.dismiss(None)

    def action_move_section(self, delta: int) -> None:
        if self.typing_search or self.selection is None:
            return
        self.section_index = (self.section_index + delta) % len(self._sections())
        self.cursor_index = 0
        self.search_query = ""
        self._refresh_content()

    def action_move_cursor(self, delta: int) -> None:
        if self.typing_search or self.selection is None:
            return
        options = self._visible_options()
        if not options:
            return
        self.cursor_index = (self.cursor_index + delta) % len(options)
        self._refresh_content()

    def action_cycle_option(self, delta: int) -> None:
        if self.typing_search or self.selection is None:
            return
        section = self._current_section()
        if section == SPIRIT_SECTION:
            choices: list[str | None] = [None]
            choices.extend(c.category_id for c in self.selection.candidates.spirit_categories)
            idx = choices.index(self.selection.category_id) if self.selection.category_id in choices else 0
            self.selection.select_category(choices[(idx + delta) % len(choices)])
        elif section == ENERGY_SECTION:
            idx = self.pack_options.index(self.selection.pack_option) if self.selection.pack_option in self.pack_options else 0
            self.selection.select_pack_option(self.pack_options[(idx + delta) % len(self.pack_options)])
        else:
            return
        self.cursor_index = 0
        self._refresh_content()

    def action_toggle_current(self) -> None:
        if self.typing_search or self.selection is None:
            return
        options = self._visible_options()
        if not options:
            return
        product = options[min(self.cursor_index, len(options) - 1)]
        section = self._current_section()
        if section == SPIRIT_SECTION:
            self.selection.select_spirit(product)
        elif section == ENERGY_SECTION:
            self.selection.select_energy_drink(product)
        else:
            self.selection.select_ice(self._slot_index(section), product)
        self._refresh_content()

    def action_start_search(self) -> None:
        if self.selection is None:
            return
        self.typing_search = True
        self.search_query = ""
        self.cursor_index = 0
        self._refresh_content()

    def action_confirm(self) -> None:
        if self.typing_search or self.selection is None:
            return
        result = self.assembler.confirm(self.selection)
        if result.record is None:
            self._refresh_content()
            return
        self.dismiss(result.record)

    # Helpers

    def _sections(self) -> list[str]:
        sections = [SPIRIT_SECTION, ENERGY_SECTION]
        sections.extend(f"{ICE_SECTION_PREFIX}{idx}" for idx in range(self.ice_slot_count))
        return sections

    def _current_section(self) -> str:
        sections = self._sections()
        return sections[self.section_index % len(sections)]

    @staticmethod
    def _slot_index(section: str) -> int:
        return int(section[len(ICE_SECTION_PREFIX) :])

    def _section_options(self, section: str) -> list[Product]:
        if self.selection is None:
            return []
        if section == SPIRIT_SECTION:
            return list(self.selection.spirit_options())
        if section == ENERGY_SECTION:
            return list(self.selection.energy_drink_options())
        return self.selection.ice_options_for_slot(self._slot_index(section))

    def _visible_options(self) -> list[Product]:
        return filter_by_name(self._section_options(self._current_section()), self.search_query)

    def _selected_in(self, section: str) -> Product | None:
        if self.selection is None:
            return None
        if section == SPIRIT_SECTION:
            return self.selection.spirit
        if section == ENERGY_SECTION:
            return self.selection.energy_drink
        return self.selection.ice_slots[self._slot_index(section)]

    def _section_title(self, section: str) -> str:
        if section == SPIRIT_SECTION:
            return "Spirit"
        if section == ENERGY_SECTION:
            return "Energy drink"
        return f"Ice {self._slot_index(section) + 1}"

    def _section_badge(self, section: str) -> str:
        if section.startswith(ICE_SECTION_PREFIX):
            return "ice"
        return section

    def _refresh_sections(self) -> None:
        widget = self.query_one("#combo-sections", Static)
        text = Text()
        current = self._current_section()
        for idx, section in enumerate(self._sections()):
            if idx > 0:
                text.append(" ")
            chosen = self._selected_in(section) is not None
            label = f"{'✓' if chosen else '·'} {self._section_title(section)}"
            if section == current:
                text.append(f" {label} ", style=badge_style(self._section_badge(section)))
            else:
                text.append(f" {label} ", style="bold white" if chosen else "dim")
        widget.update(text)

    def _refresh_body(self) -> None:
        if self.selection is None:
            return
        body = self.query_one("#combo-body", Static)
        section = self._current_section()
        content = Text(style="white")

        if section == SPIRIT_SECTION:
            category = next(
                (c for c in self.selection.candidates.spirit_categories if c.category_id == self.selection.category_id),
                None,
            )
            content.append(f"Category: ◀ {category.name if category else 'All'} ▶", style="bold white")
            content.append(f"  ({len(self.selection.spirit_options())} options)\n")
        elif section == ENERGY_SECTION:
            for option in self.pack_options:
                style = badge_style("energy") if option == self.selection.pack_option else "dim"
                content.append(f" {pack_option_label(option)} ", style=style)
                content.append(" ")
            content.append("\n")
        else:
            content.append(f"Slot {self._slot_index(section) + 1} of {self.ice_slot_count}\n", style="bold white")

        if self.typing_search:
            content.append(f"Search: {self.search_query}|\n", style="bold white")
        elif self.search_query:
            content.append(f"Search: {self.search_query}\n", style="dim")

        options = self._visible_options()
        if self.cursor_index >= len(options):
            self.cursor_index = max(0, len(options) - 1)

        selected = self._selected_in(section)
        multiplier = self.selection.energy_drink_multiplier if section == ENERGY_SECTION else 1
        if not options:
            content.append("\nNo products found", style="dim")
        for idx, product in enumerate(options):
            content.append("\n")
            content.append_text(
                format_product_row(
                    product,
                    pointer=idx == self.cursor_index,
                    selected=selected is not None and selected.product_id == product.product_id,
                    multiplier=multiplier,
                )
            )
        body.update(content)

    def _refresh_content(self) -> None:
        try:
            totals_widget = self.query_one("#combo-totals", Static)
        except NoMatches:
            return
        help_text = self.query_one("#combo-help", Static)
        if self.selection is None:
            self.query_one("#combo-sections", Static).update("")
            self.query_one("#combo-body", Static).update("Loading catalog...")
            totals_widget.update("")
            help_text.update("Esc/q close")
            return

        self._refresh_sections()
        self._refresh_body()
        totals_widget.update(format_totals(compute_totals(self.selection), DISCOUNT_PERCENT))

        if self.typing_search:
            help_text.update("Type to filter, Enter keep filter, Esc clear filter")
        else:
            help_text.update("Tab section, J/K/↑/↓ move, ←/→ category or pack, Enter toggle, / search, Ctrl+S add, Esc close")

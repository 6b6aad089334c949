"""Validation of a finished selection into an immutable combo record."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Protocol

from comboshop.config import DISCOUNT_PERCENT
from comboshop.models import ComboLine, ComboRecord
from comboshop.notifications import (
    COMBO_ADDED_MESSAGE,
    COMBO_ADDED_TITLE,
    INCOMPLETE_MESSAGE,
    INCOMPLETE_TITLE,
    Notifier,
)
from comboshop.pricing import ICE_UNITS_PER_SLOT, compute_totals, energy_drink_quantity
from comboshop.selection import ComboSelection

logger = logging.getLogger(__name__)


class ComboSink(Protocol):
    def add_combo(self, combo: ComboRecord) -> object: ...


@dataclass(frozen=True)
class ComboValidationError:
    """Recoverable rejection shown to the user."""

    title: str
    message: str
    missing: tuple[str, ...] = ()


@dataclass(frozen=True)
class AssembleResult:
    record: ComboRecord | None = None
    error: ComboValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


class ComboIdGenerator:
    """``combo-<epoch ms>`` ids, strictly increasing within one session."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last_ms = 0

    def __call__(self) -> str:
        now_ms = int(self._clock() * 1000)
        self._last_ms = max(now_ms, self._last_ms + 1)
        return f"combo-{self._last_ms}"


def assemble(
    selection: ComboSelection,
    new_id: Callable[[], str],
    percent: int = DISCOUNT_PERCENT,
) -> AssembleResult:
    """Build a combo record from a complete selection, or report what is missing."""
    spirit, energy_drink = selection.spirit, selection.energy_drink
    if spirit is None or energy_drink is None or not selection.is_complete():
        missing = tuple(selection.missing_parts())
        logger.info("assemble rejected missing=%s", ",".join(missing))
        return AssembleResult(
            error=ComboValidationError(
                title=INCOMPLETE_TITLE,
                message=INCOMPLETE_MESSAGE.format(slots=selection.ice_slot_count),
                missing=missing,
            )
        )

    totals = compute_totals(selection, percent)
    # Products are copied so later catalog refreshes cannot alter the record.
    record = ComboRecord(
        combo_id=new_id(),
        created_at=datetime.now(timezone.utc).isoformat(),
        spirit=ComboLine(replace(spirit), 1),
        energy_drink=ComboLine(replace(energy_drink), energy_drink_quantity(selection.pack_option)),
        pack_option=selection.pack_option,
        ice=tuple(ComboLine(replace(ice), ICE_UNITS_PER_SLOT) for ice in selection.filled_ice),
        discount_percent=percent,
        original_total=totals.original,
        discounted_total=totals.discounted,
    )
    logger.info(
        "assemble ok combo_id=%s original=%s discounted=%s",
        record.combo_id,
        record.original_total,
        record.discounted_total,
    )
    return AssembleResult(record=record)


class ComboAssembler:
    """Confirms a selection: hands the combo to the cart and reports the outcome."""

    def __init__(
        self,
        cart: ComboSink,
        notifier: Notifier,
        new_id: Callable[[], str] | None = None,
        percent: int = DISCOUNT_PERCENT,
    ) -> None:
        self.cart = cart
        self.notifier = notifier
        self.new_id = new_id or ComboIdGenerator()
        self.percent = percent

    def confirm(self, selection: ComboSelection) -> AssembleResult:
        result = assemble(selection, self.new_id, self.percent)
        if result.record is None:
            if result.error is not None:
                self.notifier.error(result.error.title, result.error.message)
            return result

        self.cart.add_combo(result.record)
        self.notifier.success(COMBO_ADDED_TITLE, COMBO_ADDED_MESSAGE.format(percent=self.percent))
        selection.reset()
        return result

"""In-progress combo choices and the rules for changing them."""

from __future__ import annotations

import logging
from typing import TypeVar

from comboshop.classifier import ComboCandidates
from comboshop.config import ICE_SLOT_COUNT
from comboshop.models import DEFAULT_PACK_OPTION, PackOption, Product

logger = logging.getLogger(__name__)

T = TypeVar("T")


def toggle(current: T | None, candidate: T | None) -> T | None:
    """Selecting the current value again clears it."""
    if candidate is None or current == candidate:
        return None
    return candidate


def _same_product(a: Product | None, b: Product | None) -> bool:
    return a is not None and b is not None and a.product_id == b.product_id


class ComboSelection:
    """Mutable working state of one configurator session.

    Completeness is derived from the fields on every call; there is no stored
    status. Transitions never raise for user input: a choice outside the
    current candidate list is ignored.
    """

    def __init__(self, candidates: ComboCandidates, ice_slot_count: int = ICE_SLOT_COUNT) -> None:
        if ice_slot_count < 1:
            raise ValueError("ice_slot_count must be at least 1")
        self.candidates = candidates
        self.ice_slot_count = ice_slot_count
        self.category_id: str | None = None
        self.spirit: Product | None = None
        self.pack_option: PackOption = DEFAULT_PACK_OPTION
        self.energy_drink: Product | None = None
        self.ice_slots: list[Product | None] = [None] * ice_slot_count

    # Candidate views

    def spirit_options(self) -> tuple[Product, ...]:
        return self.candidates.spirits_in_category(self.category_id)

    def energy_drink_options(self) -> tuple[Product, ...]:
        return self.candidates.energy_drinks_for(self.pack_option)

    def ice_options_for_slot(self, slot_index: int) -> list[Product]:
        """Ice candidates for one slot, minus products held by other slots."""
        taken = {
            product.product_id
            for idx, product in enumerate(self.ice_slots)
            if product is not None and idx != slot_index
        }
        return [p for p in self.candidates.ice if p.product_id not in taken]

    @property
    def energy_drink_multiplier(self) -> int:
        return self.pack_option.size

    @property
    def filled_ice(self) -> list[Product]:
        return [p for p in self.ice_slots if p is not None]

    def is_complete(self) -> bool:
        return self.spirit is not None and self.energy_drink is not None and len(self.filled_ice) == self.ice_slot_count

    def missing_parts(self) -> list[str]:
        missing: list[str] = []
        if self.spirit is None:
            missing.append("spirit")
        if self.energy_drink is None:
            missing.append("energy drink")
        open_slots = self.ice_slot_count - len(self.filled_ice)
        if open_slots:
            missing.append(f"{open_slots} ice")
        return missing

    # Transitions

    def select_category(self, category_id: str | None) -> None:
        self.category_id = category_id
        self.spirit = None
        logger.debug("select_category category_id=%r", category_id)

    def select_spirit(self, product: Product | None) -> None:
        if product is not None and not any(_same_product(product, p) for p in self.spirit_options()):
            logger.debug("select_spirit ignored product_id=%r not a candidate", product.product_id)
            return
        self.spirit = toggle(self.spirit, product)
        logger.debug("select_spirit now=%r", self.spirit.product_id if self.spirit else None)

    def select_pack_option(self, option: PackOption) -> None:
        self.pack_option = option
        self.energy_drink = None
        logger.debug("select_pack_option kind=%s size=%d", option.kind, option.size)

    def select_energy_drink(self, product: Product | None) -> None:
        if product is not None and not any(_same_product(product, p) for p in self.energy_drink_options()):
            logger.debug("select_energy_drink ignored product_id=%r not a candidate", product.product_id)
            return
        self.energy_drink = toggle(self.energy_drink, product)
        logger.debug("select_energy_drink now=%r", self.energy_drink.product_id if self.energy_drink else None)

    def select_ice(self, slot_index: int, product: Product | None) -> None:
        if not (0 <= slot_index < self.ice_slot_count):
            logger.warning("select_ice ignored slot_index=%d out of range", slot_index)
            return
        if product is not None and not any(_same_product(product, p) for p in self.ice_options_for_slot(slot_index)):
            logger.debug("select_ice ignored slot=%d product_id=%r", slot_index, product.product_id)
            return
        current = self.ice_slots[slot_index]
        self.ice_slots[slot_index] = toggle(current, product)
        logger.debug("select_ice slot=%d now=%r", slot_index, product.product_id if self.ice_slots[slot_index] else None)

    def reset(self) -> None:
        self.category_id = None
        self.spirit = None
        self.pack_option = DEFAULT_PACK_OPTION
        self.energy_drink = None
        self.ice_slots = [None] * self.ice_slot_count
        logger.debug("selection reset")

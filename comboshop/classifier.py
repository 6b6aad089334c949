"""Heuristic role tagging of catalog products for the combo configurator.

Every role filter runs independently, so a product whose name matches the
keywords of two roles is listed under both. Tagging happens once per catalog
snapshot in :func:`classify_catalog`; pickers only read the cached lists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from comboshop.catalog import CatalogSnapshot
from comboshop.config import ICE_SLOT_COUNT, SPIRIT_RULE
from comboshop.constant import (
    BULK_ICE_MARKERS,
    ENERGY_DRINK_KEYWORDS,
    ICE_KEYWORD,
    LARGE_BOTTLE_MARKER,
    NON_COMBO_ICE_MARKERS,
    SPIRIT_CATEGORY_ALLOW_LIST,
    SPIRIT_CATEGORY_KEYWORDS,
)
from comboshop.models import MIN_CAN_PACK_SIZE, Category, PackOption, Product, RoleClass

logger = logging.getLogger(__name__)

KEYWORD_RULE = "keyword"
ALLOW_LIST_RULE = "allow_list"


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def is_energy_drink_name(name: str) -> bool:
    return _contains_any(name, ENERGY_DRINK_KEYWORDS)


def is_large_bottle_name(name: str) -> bool:
    return LARGE_BOTTLE_MARKER in name.lower()


def is_ice_name(name: str) -> bool:
    return ICE_KEYWORD in name.lower()


def is_bulk_ice_bag(name: str) -> bool:
    """Bulk bags (kg / saco / grande) are sold one bag at a time."""
    return _contains_any(name, BULK_ICE_MARKERS)


def is_non_combo_ice_grade(name: str) -> bool:
    return _contains_any(name, NON_COMBO_ICE_MARKERS)


def is_spirit_category(category: Category | None, rule: str = SPIRIT_RULE) -> bool:
    """Whether products of ``category`` can fill the spirit slot."""
    if category is None:
        return False
    if rule == ALLOW_LIST_RULE:
        wanted = category.name.strip().lower()
        return any(wanted == name.lower() for name in SPIRIT_CATEGORY_ALLOW_LIST)
    return _contains_any(category.name, SPIRIT_CATEGORY_KEYWORDS)


def ice_stock_gate(name: str, ice_slot_count: int = ICE_SLOT_COUNT) -> int:
    """Minimum stock for an ice product to be offered in the slot picker."""
    return 1 if is_bulk_ice_bag(name) else ice_slot_count


def roles_for(
    product: Product,
    snapshot: CatalogSnapshot,
    *,
    spirit_rule: str = SPIRIT_RULE,
    ice_slot_count: int = ICE_SLOT_COUNT,
) -> frozenset[RoleClass]:
    """Return every combo role ``product`` qualifies for, stock gates included."""
    if not (product.combo_eligible and product.is_active):
        return frozenset()

    roles: set[RoleClass] = set()
    name = product.name

    if product.stock > 0 and is_spirit_category(snapshot.category_by_id(product.category_id), spirit_rule):
        roles.add(RoleClass.SPIRIT)

    if is_energy_drink_name(name):
        if is_large_bottle_name(name):
            if product.stock > 0:
                roles.add(RoleClass.ENERGY_DRINK_2L)
        elif product.stock >= MIN_CAN_PACK_SIZE:
            roles.add(RoleClass.ENERGY_DRINK_PACK)

    if is_ice_name(name) and not is_non_combo_ice_grade(name):
        if product.stock >= ice_stock_gate(name, ice_slot_count):
            roles.add(RoleClass.ICE)

    return frozenset(roles)


@dataclass(frozen=True)
class ComboCandidates:
    """Role-tagged candidate lists computed once per catalog snapshot."""

    spirits: tuple[Product, ...] = ()
    spirit_categories: tuple[Category, ...] = ()
    large_bottles: tuple[Product, ...] = ()
    can_packs: tuple[Product, ...] = ()
    ice: tuple[Product, ...] = ()
    roles: dict[str, frozenset[RoleClass]] = field(default_factory=dict, compare=False, repr=False)

    def roles_of(self, product_id: str) -> frozenset[RoleClass]:
        return self.roles.get(product_id, frozenset())

    def spirits_in_category(self, category_id: str | None) -> tuple[Product, ...]:
        if category_id is None:
            return self.spirits
        return tuple(p for p in self.spirits if p.category_id == category_id)

    def energy_drinks_for(self, option: PackOption) -> tuple[Product, ...]:
        if not option.is_can_pack:
            return self.large_bottles
        # A pack consumes ``size`` stock units of the same can.
        return tuple(p for p in self.can_packs if p.stock >= option.size)


def classify_catalog(
    snapshot: CatalogSnapshot,
    *,
    spirit_rule: str = SPIRIT_RULE,
    ice_slot_count: int = ICE_SLOT_COUNT,
) -> ComboCandidates:
    """Tag every product of ``snapshot`` and split the catalog by role."""
    roles: dict[str, frozenset[RoleClass]] = {}
    for product in snapshot.products:
        tags = roles_for(
            product,
            snapshot,
            spirit_rule=spirit_rule,
            ice_slot_count=ice_slot_count,
        )
        if tags:
            roles[product.product_id] = tags

    def with_role(role: RoleClass) -> tuple[Product, ...]:
        return tuple(p for p in snapshot.products if role in roles.get(p.product_id, ()))

    candidates = ComboCandidates(
        spirits=with_role(RoleClass.SPIRIT),
        spirit_categories=tuple(c for c in snapshot.categories if is_spirit_category(c, spirit_rule)),
        large_bottles=with_role(RoleClass.ENERGY_DRINK_2L),
        can_packs=with_role(RoleClass.ENERGY_DRINK_PACK),
        ice=with_role(RoleClass.ICE),
        roles=roles,
    )
    logger.debug(
        "classified catalog spirits=%d large_bottles=%d can_packs=%d ice=%d",
        len(candidates.spirits),
        len(candidates.large_bottles),
        len(candidates.can_packs),
        len(candidates.ice),
    )
    return candidates


def filter_by_name(products: Sequence[Product], query: str) -> list[Product]:
    """Case-insensitive substring search used by every picker."""
    needle = query.strip().lower()
    if not needle:
        return list(products)
    return [p for p in products if needle in p.name.lower()]

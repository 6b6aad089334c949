"""Editable keyword tables used to classify catalog products into combo roles."""

from __future__ import annotations

SPIRIT_CATEGORY_KEYWORDS: tuple[str, ...] = (
    "gin",
    "whisky",
    "whiskey",
    "cachaça",
    "cachaca",
    "vodka",
    "sake",
    "saque",
    "rum",
)

# Exact category names accepted when the allow-list spirit rule is active.
SPIRIT_CATEGORY_ALLOW_LIST: tuple[str, ...] = ("Gin", "Vodka", "Cachaça", "Whisky")

ENERGY_DRINK_KEYWORDS: tuple[str, ...] = (
    "energetico",
    "energético",
    "redbull",
    "red bull",
    "monster",
    "tnt",
    "burn",
    "fusion",
    "energy",
)

LARGE_BOTTLE_MARKER = "2l"

ICE_KEYWORD = "gelo"
BULK_ICE_MARKERS: tuple[str, ...] = ("kg", "saco", "grande")
NON_COMBO_ICE_MARKERS: tuple[str, ...] = ("triturado", "premium", "crushed")

SPECIAL_DRINK_CATEGORY_NAMES: tuple[str, ...] = ("CAIPIRINHAS", "DRINKS ESPECIAIS", "COPAO", "BATIDAS")

PACK_OPTION_LABELS: dict[str, str] = {
    "single_large_bottle": "1 Garrafa 2L",
    "multi_can_pack": "{size} Latas",
}

SOLD_OUT_LABEL = "sold out"

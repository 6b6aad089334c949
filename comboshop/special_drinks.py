"""House special drinks grouped by their special categories."""

from __future__ import annotations

import unicodedata

from comboshop.catalog import CatalogSnapshot
from comboshop.constant import SPECIAL_DRINK_CATEGORY_NAMES
from comboshop.models import Category, Product


def special_categories(snapshot: CatalogSnapshot) -> list[Category]:
    """Active categories whose name is one of the special drink groups."""
    wanted = {_fold(name) for name in SPECIAL_DRINK_CATEGORY_NAMES}
    return [c for c in snapshot.categories if c.is_active and _fold(c.name) in wanted]


def drinks_in_category(snapshot: CatalogSnapshot, category_id: str | None) -> list[Product]:
    if category_id is None:
        return []
    return [p for p in snapshot.products if p.is_active and p.category_id == category_id]


def default_category_id(snapshot: CatalogSnapshot) -> str | None:
    categories = special_categories(snapshot)
    return categories[0].category_id if categories else None


def _fold(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

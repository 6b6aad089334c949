from __future__ import annotations

from decimal import Decimal

import pytest

from comboshop.catalog import CatalogSnapshot
from comboshop.classifier import classify_catalog
from comboshop.models import Category, PackOption, Product
from comboshop.selection import ComboSelection


def make_product(product_id: str, name: str, price: str = "10.00", **kwargs) -> Product:
    kwargs.setdefault("category_id", None)
    kwargs.setdefault("stock", 10)
    kwargs.setdefault("combo_eligible", True)
    return Product(product_id=product_id, name=name, sale_price=Decimal(price), **kwargs)


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str]] = []

    def success(self, title: str, message: str) -> None:
        self.successes.append((title, message))

    def error(self, title: str, message: str) -> None:
        self.errors.append((title, message))


@pytest.fixture
def snapshot() -> CatalogSnapshot:
    categories = (
        Category("c-gin", "Gin"),
        Category("c-vodka", "Vodka"),
        Category("c-rum", "Rum Importado"),
        Category("c-energy", "Energéticos"),
        Category("c-ice", "Gelo"),
        Category("c-beer", "Cervejas"),
    )
    products = (
        make_product("gin-1", "Gin Tanqueray", "50.00", category_id="c-gin", stock=3),
        make_product("vodka-1", "Vodka Absolut", "80.00", category_id="c-vodka", stock=1),
        make_product("vodka-out", "Vodka Zero Stock", "40.00", category_id="c-vodka", stock=0),
        make_product("rum-1", "Bacardi Carta Blanca", "45.00", category_id="c-rum", stock=2),
        make_product("beer-1", "Heineken Long Neck", "7.00", category_id="c-beer", stock=50),
        make_product("rb-2l", "Red Bull 2L", "30.00", category_id="c-energy", stock=1),
        make_product("rb-can", "Red Bull Lata", "6.00", category_id="c-energy", stock=12),
        make_product("monster-can", "Monster Energy Lata", "7.50", category_id="c-energy", stock=4),
        make_product("tnt-can-low", "TNT Lata", "5.00", category_id="c-energy", stock=3),
        make_product("gelo-coco", "Gelo de Coco", "3.00", category_id="c-ice", stock=8),
        make_product("gelo-limao", "Gelo de Limão", "3.00", category_id="c-ice", stock=8),
        make_product("gelo-uva", "Gelo de Uva", "3.00", category_id="c-ice", stock=4),
        make_product("gelo-menta", "Gelo de Menta", "3.00", category_id="c-ice", stock=4),
        make_product("gelo-saco", "Gelo Saco 5kg", "15.00", category_id="c-ice", stock=1),
        make_product("gelo-poucos", "Gelo de Morango", "3.00", category_id="c-ice", stock=2),
        make_product("gelo-triturado", "Gelo Triturado", "9.00", category_id="c-ice", stock=30),
        make_product("gelo-inativo", "Gelo de Abacaxi", "3.00", category_id="c-ice", stock=30, is_active=False),
    )
    return CatalogSnapshot(products=products, categories=categories)


@pytest.fixture
def candidates(snapshot):
    return classify_catalog(snapshot, spirit_rule="keyword", ice_slot_count=4)


@pytest.fixture
def selection(candidates) -> ComboSelection:
    return ComboSelection(candidates, ice_slot_count=4)


def fill_complete(selection: ComboSelection, snapshot: CatalogSnapshot) -> None:
    """Spirit 50.00, 4 cans at 6.00 and four 3.00 ice slots."""
    selection.select_spirit(snapshot.product_by_id("gin-1"))
    selection.select_pack_option(PackOption.multi_can_pack(4))
    selection.select_energy_drink(snapshot.product_by_id("rb-can"))
    for slot, product_id in enumerate(("gelo-coco", "gelo-limao", "gelo-uva", "gelo-menta")):
        selection.select_ice(slot, snapshot.product_by_id(product_id))

from __future__ import annotations

from comboshop.catalog import CatalogSnapshot
from comboshop.models import Category
from comboshop.rendering import format_special_drink_row
from comboshop.special_drinks import default_category_id, drinks_in_category, special_categories

from conftest import make_product


def _snapshot() -> CatalogSnapshot:
    return CatalogSnapshot(
        categories=(
            Category("c-caipi", "Caipirinhas"),
            Category("c-copao", "Copão"),
            Category("c-batidas", "BATIDAS", is_active=False),
            Category("c-gin", "Gin"),
        ),
        products=(
            make_product("caipi-1", "Caipirinha de Limão", category_id="c-caipi"),
            make_product("caipi-2", "Caipirinha Antiga", category_id="c-caipi", is_active=False),
            make_product("copao-1", "Copão de Gin", category_id="c-copao"),
        ),
    )


def test_special_categories_match_names_case_and_accent_insensitive():
    assert [c.category_id for c in special_categories(_snapshot())] == ["c-caipi", "c-copao"]


def test_default_category_is_first_special():
    assert default_category_id(_snapshot()) == "c-caipi"
    assert default_category_id(CatalogSnapshot()) is None


def test_drinks_in_category_lists_active_products():
    snapshot = _snapshot()
    assert [p.product_id for p in drinks_in_category(snapshot, "c-caipi")] == ["caipi-1"]
    assert drinks_in_category(snapshot, None) == []
    assert drinks_in_category(snapshot, "c-gin") == []


def test_sold_out_marker_only_for_stocked_drinks():
    empty = make_product("lata", "Copão Energético", stock=0)
    prepared = make_product("caipi", "Caipirinha de Limão", stock=0, is_prepared=True)
    stocked = make_product("batida", "Batida de Coco", stock=5)

    assert "sold out" in format_special_drink_row(empty, pointer=False).plain
    assert "sold out" not in format_special_drink_row(prepared, pointer=False).plain
    assert "sold out" not in format_special_drink_row(stocked, pointer=True).plain


def test_special_drink_row_shows_cart_quantity():
    row = format_special_drink_row(make_product("batida", "Batida de Coco"), pointer=True, in_cart=2).plain
    assert row.startswith("➤ Batida de Coco")
    assert "(2 in cart)" in row

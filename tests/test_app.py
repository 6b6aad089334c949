from __future__ import annotations

import asyncio
from decimal import Decimal

from comboshop.catalog import CatalogError
from comboshop.combo_modal import ComboModal
from comboshop.models import ComboCartLine
from comboshop.shop_app import ComboShopApp
from comboshop.special_drinks_modal import SpecialDrinksModal


class StaticSource:
    def __init__(self, snapshot) -> None:
        self.snapshot = snapshot

    def fetch_products(self):
        return list(self.snapshot.products)

    def fetch_categories(self):
        return list(self.snapshot.categories)


async def _wait_for_catalog(app: ComboShopApp, pilot) -> None:
    for _ in range(50):
        if app.candidates is not None:
            return
        await pilot.pause(0.05)
    raise AssertionError("catalog did not load")


def test_combo_modal_builds_combo_into_cart(snapshot):
    async def scenario() -> None:
        app = ComboShopApp(source=StaticSource(snapshot))
        async with app.run_test() as pilot:
            await _wait_for_catalog(app, pilot)
            await pilot.press("c")
            await pilot.pause()
            assert isinstance(app.screen, ComboModal)

            # Spirit: first candidate (Gin Tanqueray).
            await pilot.press("enter", "tab")
            # Energy: switch to the can pack and take Red Bull Lata.
            await pilot.press("right", "enter", "tab")
            # Four ice slots, each takes the first product not used elsewhere.
            for _ in range(4):
                await pilot.press("enter", "tab")

            await pilot.press("ctrl+s")
            await pilot.pause()

            assert not isinstance(app.screen, ComboModal)
            lines = app.cart.lines
            assert len(lines) == 1
            assert isinstance(lines[0], ComboCartLine)
            assert lines[0].combo.original_total == Decimal("86.00")
            assert lines[0].combo.discounted_total == Decimal("81.70")

    asyncio.run(scenario())


def test_combo_modal_incomplete_stays_open(snapshot):
    async def scenario() -> None:
        app = ComboShopApp(source=StaticSource(snapshot))
        async with app.run_test() as pilot:
            await _wait_for_catalog(app, pilot)
            await pilot.press("c")
            await pilot.pause()
            await pilot.press("enter", "ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, ComboModal)
            assert app.screen.selection is not None
            assert app.screen.selection.spirit is not None
            assert app.cart.is_empty

            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, ComboModal)

    asyncio.run(scenario())


def test_special_drinks_modal_opens_with_empty_state(snapshot):
    async def scenario() -> None:
        app = ComboShopApp(source=StaticSource(snapshot))
        async with app.run_test() as pilot:
            await _wait_for_catalog(app, pilot)
            await pilot.press("s")
            await pilot.pause()
            assert isinstance(app.screen, SpecialDrinksModal)
            await pilot.press("enter", "escape")
            await pilot.pause()
            assert app.cart.is_empty

    asyncio.run(scenario())


class FailingSource:
    def fetch_products(self):
        raise CatalogError("database is locked")

    def fetch_categories(self):
        raise CatalogError("database is locked")


def test_catalog_failure_leaves_empty_session():
    async def scenario() -> None:
        app = ComboShopApp(source=FailingSource())
        async with app.run_test() as pilot:
            await _wait_for_catalog(app, pilot)
            assert app.snapshot is not None
            assert app.snapshot.is_empty
            assert app.system_status.startswith("Catalog unavailable")
            assert app.candidates.spirits == ()

            await pilot.press("c")
            await pilot.pause()
            await pilot.press("enter", "ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, ComboModal)
            assert app.cart.is_empty

    asyncio.run(scenario())

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from comboshop.assembler import ComboAssembler, ComboIdGenerator, assemble
from comboshop.cart import Cart
from comboshop.models import DEFAULT_PACK_OPTION

from conftest import RecordingNotifier, fill_complete


def test_assemble_incomplete_reports_missing(selection, snapshot):
    selection.select_spirit(snapshot.product_by_id("gin-1"))
    result = assemble(selection, ComboIdGenerator())
    assert not result.ok
    assert result.record is None
    assert result.error is not None
    assert result.error.missing == ("energy drink", "4 ice")
    assert "4 ice units" in result.error.message


def test_assemble_complete_builds_record(selection, snapshot):
    fill_complete(selection, snapshot)
    result = assemble(selection, lambda: "combo-1")
    record = result.record
    assert record is not None
    assert record.combo_id == "combo-1"
    assert record.spirit.product.product_id == "gin-1"
    assert record.spirit.quantity == 1
    assert record.energy_drink.product.product_id == "rb-can"
    assert record.energy_drink.quantity == 4
    assert [line.product.product_id for line in record.ice] == ["gelo-coco", "gelo-limao", "gelo-uva", "gelo-menta"]
    assert all(line.quantity == 1 for line in record.ice)
    assert record.discount_percent == 5
    assert record.original_total == Decimal("86.00")
    assert record.discounted_total == Decimal("81.70")
    assert record.discount_amount == Decimal("4.30")


def test_assemble_does_not_mutate_selection(selection, snapshot):
    fill_complete(selection, snapshot)
    slots_before = list(selection.ice_slots)
    assemble(selection, ComboIdGenerator())
    assert selection.ice_slots == slots_before
    assert selection.is_complete()


def test_assemble_twice_gives_distinct_ids(selection, snapshot):
    fill_complete(selection, snapshot)
    new_id = ComboIdGenerator(clock=lambda: 1700000000.0)
    first = assemble(selection, new_id).record
    second = assemble(selection, new_id).record
    assert first is not None and second is not None
    assert first.combo_id != second.combo_id
    assert replace(first, combo_id="x", created_at="t") == replace(second, combo_id="x", created_at="t")


def test_id_generator_is_strictly_increasing():
    new_id = ComboIdGenerator(clock=lambda: 1.0)
    assert [new_id() for _ in range(3)] == ["combo-1000", "combo-1001", "combo-1002"]


def test_record_holds_copies_of_products(selection, snapshot):
    fill_complete(selection, snapshot)
    record = assemble(selection, ComboIdGenerator()).record
    assert record is not None
    assert record.spirit.product == snapshot.product_by_id("gin-1")
    assert record.spirit.product is not snapshot.product_by_id("gin-1")


def test_confirm_success_hands_to_cart_and_resets(selection, snapshot):
    cart = Cart()
    notifier = RecordingNotifier()
    assembler = ComboAssembler(cart, notifier)
    fill_complete(selection, snapshot)

    result = assembler.confirm(selection)

    assert result.ok
    assert len(cart.lines) == 1
    assert cart.total == Decimal("81.70")
    assert notifier.errors == []
    assert notifier.successes == [("Combo added!", "Combo with 5% off was added to the cart.")]
    assert selection.spirit is None
    assert selection.energy_drink is None
    assert selection.pack_option == DEFAULT_PACK_OPTION
    assert selection.ice_slots == [None, None, None, None]


def test_confirm_incomplete_keeps_state(selection, snapshot):
    cart = Cart()
    notifier = RecordingNotifier()
    assembler = ComboAssembler(cart, notifier)
    gin = snapshot.product_by_id("gin-1")
    selection.select_spirit(gin)

    result = assembler.confirm(selection)

    assert not result.ok
    assert cart.is_empty
    assert notifier.successes == []
    assert len(notifier.errors) == 1
    assert selection.spirit == gin

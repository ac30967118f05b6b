"""Tests for the cart aggregate and its in-memory storage."""

from decimal import Decimal

import pytest

from storefront.cart import Cart, CartLine, InMemoryCartStorage
from storefront.schemas.orders import MAX_LINE_QUANTITY


def _line(menu_item_id, quantity=1, price="5.00", name=None, notes=None):
    return CartLine(
        menu_item_id=menu_item_id,
        name=name or f"Item {menu_item_id}",
        price=Decimal(price),
        quantity=quantity,
        notes=notes,
    )


@pytest.fixture
def storage():
    return InMemoryCartStorage()


def test_adding_same_item_merges_quantity(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1, quantity=2))
    cart.add_item(_line(1, quantity=3))

    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 5
    assert cart.total_items() == 5


def test_totals(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1, quantity=2, price="5.00"))
    cart.add_item(_line(2, quantity=1, price="3.50"))

    assert cart.total_price() == Decimal("13.50")
    assert cart.total_items() == 3


def test_update_quantity_to_zero_removes_line(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1))
    cart.add_item(_line(2))

    cart.update_quantity(1, 0)

    assert [line.menu_item_id for line in cart.lines] == [2]


def test_update_quantity_and_notes(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1))

    cart.update_quantity(1, 4)
    cart.update_notes(1, "no onions")

    assert cart.get_line(1).quantity == 4
    assert cart.get_line(1).notes == "no onions"


def test_add_rejects_non_positive_quantity(storage):
    cart = Cart(storage, "u1")
    with pytest.raises(ValueError):
        cart.add_item(_line(1, quantity=0))
    assert cart.is_empty()


def test_every_change_is_persisted(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1, quantity=2, price="4.25", notes="extra hot"))

    reloaded = Cart(storage, "u1")

    assert reloaded.lines == cart.lines
    assert storage.load("u1")[0]["price"] == "4.25"


def test_carts_are_isolated_by_key(storage):
    Cart(storage, "u1").add_item(_line(1))
    assert Cart(storage, "u2").is_empty()


def test_clear_and_remove(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1))
    cart.add_item(_line(2))

    cart.remove_item(1)
    assert [line.menu_item_id for line in Cart(storage, "u1").lines] == [2]

    cart.clear()
    assert Cart(storage, "u1").is_empty()
    assert storage.load("u1") == []


def test_to_order_lines_keeps_insertion_order(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(7, quantity=1, notes="well done"))
    cart.add_item(_line(3, quantity=2))

    lines = cart.to_order_lines()

    assert [(l.menu_item_id, l.quantity, l.notes) for l in lines] == [(7, 1, "well done"), (3, 2, None)]


def test_loaded_lines_are_copies(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1))

    saved = storage.load("u1")
    saved[0]["quantity"] = 99

    assert Cart(storage, "u1").lines[0].quantity == 1


def test_line_quantity_is_capped(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1, quantity=MAX_LINE_QUANTITY))

    with pytest.raises(ValueError):
        cart.add_item(_line(1))
    with pytest.raises(ValueError):
        cart.update_quantity(1, MAX_LINE_QUANTITY + 1)

    assert Cart(storage, "u1").lines[0].quantity == MAX_LINE_QUANTITY


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_idle_carts_expire():
    clock = FakeClock()
    storage = InMemoryCartStorage(max_age=60, clock=clock)
    Cart(storage, "idle").add_item(_line(1))
    clock.now += 30
    Cart(storage, "busy").add_item(_line(2))

    clock.now += 45

    assert Cart(storage, "idle").is_empty()
    assert not Cart(storage, "busy").is_empty()
    assert len(storage) == 1


def test_least_recently_saved_cart_is_evicted_when_full():
    clock = FakeClock()
    storage = InMemoryCartStorage(max_carts=2, clock=clock)
    for key in ("a", "b"):
        clock.now += 1
        Cart(storage, key).add_item(_line(1))
    clock.now += 1
    Cart(storage, "a").add_item(_line(2))

    clock.now += 1
    Cart(storage, "c").add_item(_line(1))

    assert len(storage) == 2
    assert Cart(storage, "b").is_empty()
    assert len(Cart(storage, "a").lines) == 2


def test_emptied_cart_frees_its_slot(storage):
    cart = Cart(storage, "u1")
    cart.add_item(_line(1))
    cart.clear()

    assert len(storage) == 0

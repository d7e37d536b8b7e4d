from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.models.cart import Cart
from app.models.checkout import CheckoutAttempt
from app.services.cart_service import CartService

from conftest import make_product


def test_repeated_add_accumulates_quantity():
    cart = Cart()
    apple = make_product("apple")

    for _ in range(5):
        cart.add(apple)

    assert len(cart) == 1
    assert cart.items[0].quantity == 5


def test_add_keeps_position_of_existing_item():
    cart = Cart()
    a, b = make_product("a"), make_product("b")

    cart.add(a)
    cart.add(b)
    cart.add(a)

    assert [(it.id, it.quantity) for it in cart.items] == [("a", 2), ("b", 1)]


def test_total_is_exact_decimal_sum():
    cart = Cart()
    cart.add(make_product("a", price="0.10"))
    cart.add(make_product("a", price="0.10"))
    cart.add(make_product("b", price="0.20"))

    assert cart.total() == Decimal("0.40")
    assert cart.count() == 3


def test_add_does_not_check_stock():
    cart = Cart()
    cart.add(make_product("sold-out", stock=0))

    assert cart.items[0].quantity == 1


def test_add_add_remove_leaves_empty_cart():
    cart = Cart()
    a = make_product("a")

    cart.add(a)
    cart.add(a)
    assert cart.items[0].quantity == 2

    cart.remove("a")

    assert cart.is_empty()
    assert cart.total() == Decimal("0")


def test_remove_unknown_is_noop_and_clear_empties():
    cart = Cart()
    cart.add(make_product("a"))

    cart.remove("missing")
    assert len(cart) == 1

    cart.clear()
    assert cart.items == []


def test_snapshot_is_independent_of_cart():
    cart = Cart()
    cart.add(make_product("a"))

    snapshot = cart.snapshot()
    cart.add(make_product("a"))

    assert snapshot[0].quantity == 1
    assert cart.items[0].quantity == 2


class FixedCatalog:
    def __init__(self, product):
        self.product = product

    def get_product(self, session, product_id):
        return self.product


def test_concurrent_adds_keep_a_single_line(storefront):
    service = CartService(FixedCatalog(make_product("a")))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: service.add_to_cart(None, storefront, "a"), range(200)))

    assert len(storefront.cart) == 1
    assert storefront.cart.count() == 200


def test_cart_changes_are_refused_during_checkout(storefront):
    service = CartService(FixedCatalog(make_product("a")))
    service.add_to_cart(None, storefront, "a")
    storefront.checkout = CheckoutAttempt(step="awaiting_payment")

    for change in (
        lambda: service.add_to_cart(None, storefront, "a"),
        lambda: service.remove_item(storefront, "a"),
        lambda: service.clear_cart(storefront),
    ):
        with pytest.raises(HTTPException) as exc:
            change()
        assert exc.value.status_code == 409

    assert storefront.cart.count() == 1

    storefront.checkout.step = "confirmed"
    assert service.add_to_cart(None, storefront, "a").total_quantity == 2

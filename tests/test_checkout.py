from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.models.user import User
from app.repositories.record_repo import RecordRepository, StoreOutcome
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

from conftest import make_product

repo = RecordRepository()
order_service = OrderService(repo)

CUSTOMER = User(id="u1", name="Ana", email="ana@mail.com", role="CUSTOMER")


@pytest.fixture
def codes():
    issued = []

    def factory(total: Decimal) -> str:
        issued.append(total)
        return f"PIX-{len(issued)}"

    return issued, factory


@pytest.fixture
def checkout(codes):
    _, factory = codes
    return CheckoutService(order_service, payment_code_factory=factory)


@pytest.fixture
def filled(storefront):
    storefront.cart.add(make_product("a", price="8.50"))
    storefront.cart.add(make_product("a", price="8.50"))
    storefront.cart.add(make_product("b", price="3.00"))
    return storefront


def test_start_requires_items(checkout, storefront):
    with pytest.raises(HTTPException) as exc:
        checkout.start(storefront)
    assert exc.value.status_code == 400


def test_start_opens_review_on_checkout_screen(checkout, filled):
    read = checkout.start(filled)

    assert read.step == "review"
    assert read.total == Decimal("20.00")
    assert read.payment_code is None
    assert filled.view.current == "CHECKOUT"


def test_payment_code_is_stable_across_back_and_forth(checkout, filled, codes):
    issued, _ = codes
    checkout.start(filled)

    first = checkout.proceed_to_payment(filled).payment_code
    assert checkout.get(filled).payment_code == first
    checkout.back_to_review(filled)
    second = checkout.proceed_to_payment(filled).payment_code

    assert first == second == "PIX-1"
    assert issued == [Decimal("20.00")]


def test_confirm_from_review_is_rejected(checkout, filled, session):
    checkout.start(filled)

    with pytest.raises(HTTPException) as exc:
        checkout.confirm(session, filled, CUSTOMER)
    assert exc.value.status_code == 400


def test_guest_confirm_redirects_to_login_without_side_effects(checkout, filled, session):
    checkout.start(filled)
    checkout.proceed_to_payment(filled)

    with pytest.raises(HTTPException) as exc:
        checkout.confirm(session, filled, None)

    assert exc.value.status_code == 401
    assert filled.view.current == "LOGIN"
    assert filled.cart.count() == 3
    assert order_service.list_orders(session) == []
    assert filled.checkout.step == "awaiting_payment"


def test_confirm_records_one_order_and_clears_cart(checkout, filled, session):
    expected_items = filled.cart.snapshot()
    checkout.start(filled)
    checkout.proceed_to_payment(filled)

    read = checkout.confirm(session, filled, CUSTOMER)

    orders = order_service.list_orders(session)
    assert len(orders) == 1
    order = orders[0]
    assert order.user_id == "u1"
    assert order.items == expected_items
    assert order.total == Decimal("20.00")
    assert order.total == sum(it.price * it.quantity for it in order.items)
    assert order.status == "paid"
    assert order.payment_method == "PIX"

    assert filled.cart.is_empty()
    assert read.step == "confirmed"
    assert read.persisted is True
    assert read.order.id == order.id
    assert [it.id for it in read.items] == ["a", "b"]


def test_confirm_reports_unpersisted_order(checkout, filled, session, monkeypatch):
    monkeypatch.setattr(order_service, "record_order", lambda *a: StoreOutcome.failure("boom"))
    checkout.start(filled)
    checkout.proceed_to_payment(filled)

    read = checkout.confirm(session, filled, CUSTOMER)

    assert read.step == "confirmed"
    assert read.persisted is False
    assert filled.cart.is_empty()


def test_confirm_with_emptied_cart_is_rejected(checkout, filled, session):
    checkout.start(filled)
    checkout.proceed_to_payment(filled)
    filled.cart.clear()

    with pytest.raises(HTTPException) as exc:
        checkout.confirm(session, filled, CUSTOMER)
    assert exc.value.status_code == 400
    assert order_service.list_orders(session) == []


def test_close_is_allowed_from_review_and_confirmed_only(checkout, filled, session):
    checkout.start(filled)
    checkout.proceed_to_payment(filled)

    with pytest.raises(HTTPException) as exc:
        checkout.close(filled)
    assert exc.value.status_code == 400

    checkout.confirm(session, filled, CUSTOMER)
    checkout.close(filled)

    assert filled.checkout is None
    assert filled.view.current == "HOME"


def test_cancel_from_review_keeps_cart(checkout, filled):
    checkout.start(filled)

    checkout.close(filled)

    assert filled.checkout is None
    assert filled.cart.count() == 3

    with pytest.raises(HTTPException) as exc:
        checkout.get(filled)
    assert exc.value.status_code == 404


def test_concurrent_confirms_place_one_order(filled, session):
    recorded = []

    class RecordingOrders:
        def record_order(self, session, order):
            recorded.append(order)
            return StoreOutcome.success()

    service = CheckoutService(RecordingOrders(), payment_code_factory=lambda total: "PIX")
    service.start(filled)
    service.proceed_to_payment(filled)

    def attempt(_):
        try:
            return service.confirm(session, filled, CUSTOMER).step
        except HTTPException as exc:
            return exc.status_code

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(attempt, range(8)))

    assert results.count("confirmed") == 1
    assert results.count(400) == 7
    assert len(recorded) == 1

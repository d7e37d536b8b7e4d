# app/services/checkout_service.py
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.pix import generate_pix_code
from app.core.storefront import Storefront
from app.models.checkout import CheckoutAttempt
from app.models.order import Order
from app.models.user import User
from app.schemas.checkout import CheckoutRead
from app.services.cart_service import to_item_read
from app.services.order_service import OrderService

logger = logging.getLogger(__name__)

settings = get_settings()

# "closed" is not a step: it means the attempt is discarded.
TRANSITIONS: dict[str, set[str]] = {
    "review": {"awaiting_payment", "closed"},
    "awaiting_payment": {"review", "confirmed"},
    "confirmed": {"closed"},
}


def default_payment_code(total: Decimal) -> str:
    return generate_pix_code(total, settings.PIX_MERCHANT_NAME, settings.PIX_MERCHANT_CITY)


class CheckoutService:
    """
    Checkout state machine:

      review           -> awaiting_payment, closed (cancel)
      awaiting_payment -> review (back), confirmed
      confirmed        -> closed (back to the store)

    Confirming requires a logged-in user; without one the client is
    sent to LOGIN and nothing is written or cleared.
    """

    def __init__(
        self,
        order_service: OrderService,
        payment_code_factory: Callable[[Decimal], str] = default_payment_code,
    ):
        self.order_service = order_service
        self.payment_code_factory = payment_code_factory

    # -------- helpers --------

    @staticmethod
    def _get_attempt(storefront: Storefront) -> CheckoutAttempt:
        if storefront.checkout is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No checkout in progress",
            )
        return storefront.checkout

    @staticmethod
    def _transition(attempt: CheckoutAttempt, new: str) -> None:
        if new not in TRANSITIONS.get(attempt.step, set()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid checkout transition: {attempt.step} -> {new}",
            )
        if new != "closed":
            attempt.step = new

    @staticmethod
    def _ensure_cart_not_empty(storefront: Storefront) -> None:
        if storefront.cart.is_empty():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )

    @staticmethod
    def _to_read(attempt: CheckoutAttempt, storefront: Storefront) -> CheckoutRead:
        if attempt.order is not None:
            items = attempt.order.items
            total = attempt.order.total
        else:
            items = storefront.cart.items
            total = storefront.cart.total()

        return CheckoutRead(
            step=attempt.step,
            items=[to_item_read(it) for it in items],
            total=total,
            payment_code=attempt.payment_code,
            order=attempt.order,
            persisted=attempt.persisted,
        )

    # -------- operations --------

    def start(self, storefront: Storefront) -> CheckoutRead:
        """
        Open a new attempt in review. Replaces any previous attempt.

        From here until confirmation the cart is frozen, so review,
        payment code and order all see the same items.
        """
        with storefront.lock:
            self._ensure_cart_not_empty(storefront)
            attempt = CheckoutAttempt()
            storefront.checkout = attempt
            storefront.view.go("CHECKOUT")
            return self._to_read(attempt, storefront)

    def get(self, storefront: Storefront) -> CheckoutRead:
        with storefront.lock:
            return self._to_read(self._get_attempt(storefront), storefront)

    def proceed_to_payment(self, storefront: Storefront) -> CheckoutRead:
        """
        review -> awaiting_payment.

        The payment code is created on the first visit and reused if
        the client goes back and forth.
        """
        with storefront.lock:
            attempt = self._get_attempt(storefront)
            self._ensure_cart_not_empty(storefront)
            self._transition(attempt, "awaiting_payment")
            if attempt.payment_code is None:
                attempt.payment_code = self.payment_code_factory(storefront.cart.total())
            return self._to_read(attempt, storefront)

    def back_to_review(self, storefront: Storefront) -> CheckoutRead:
        with storefront.lock:
            attempt = self._get_attempt(storefront)
            self._transition(attempt, "review")
            return self._to_read(attempt, storefront)

    def confirm(
        self,
        session: Session,
        storefront: Storefront,
        user: User | None,
    ) -> CheckoutRead:
        """
        awaiting_payment -> confirmed.

        Steps:
          1. Validate the transition.
          2. No user => screen LOGIN, 401; cart and orders untouched.
          3. Snapshot the cart into an Order (status 'paid', PIX).
          4. Record the order; a failed write is reported via `persisted`.
          5. Clear the cart.

        Runs entirely under the storefront lock: concurrent confirms
        place one order, the others see an invalid transition.
        """
        with storefront.lock:
            attempt = self._get_attempt(storefront)
            if "confirmed" not in TRANSITIONS.get(attempt.step, set()):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid checkout transition: {attempt.step} -> confirmed",
                )

            if user is None:
                storefront.view.go("LOGIN")
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Log in to complete your order",
                )

            self._ensure_cart_not_empty(storefront)

            items = storefront.cart.snapshot()
            order = Order(
                id=uuid.uuid4().hex,
                user_id=user.id,
                items=items,
                total=sum((it.line_total for it in items), Decimal("0")),
                status="paid",
                date=datetime.now(timezone.utc),
                payment_method="PIX",
            )

            outcome = self.order_service.record_order(session, order)
            if not outcome.ok:
                logger.warning("Order %s was not persisted: %s", order.id, outcome.error)

            storefront.cart.clear()
            self._transition(attempt, "confirmed")
            attempt.order = order
            attempt.persisted = outcome.ok
            return self._to_read(attempt, storefront)

    def close(self, storefront: Storefront) -> None:
        """
        Leave checkout: cancel from review, or finish from confirmed.
        """
        with storefront.lock:
            attempt = self._get_attempt(storefront)
            self._transition(attempt, "closed")
            storefront.checkout = None
            storefront.view.go("HOME")

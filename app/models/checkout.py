# app/models/checkout.py
from dataclasses import dataclass

from app.models.order import Order


@dataclass
class CheckoutAttempt:
    """
    State of one pass through checkout.

    step: review | awaiting_payment | confirmed
    payment_code is generated on the first move to awaiting_payment
    and kept until the attempt is discarded. The cart cannot change
    while the attempt is open, so the code always matches the order.
    """

    step: str = "review"
    payment_code: str | None = None
    order: Order | None = None
    persisted: bool | None = None

    @property
    def is_open(self) -> bool:
        return self.step != "confirmed"

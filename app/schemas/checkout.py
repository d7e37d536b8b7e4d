# app/schemas/checkout.py
from decimal import Decimal
from typing import Literal

from sqlmodel import SQLModel

from app.models.order import Order
from app.schemas.cart import CartItemRead

CheckoutStep = Literal["review", "awaiting_payment", "confirmed"]


class CheckoutRead(SQLModel):
    """
    Current checkout attempt.

    - review: items/total are the live cart
    - awaiting_payment: payment_code is set
    - confirmed: order is set; persisted is False if the store write failed
    """

    step: CheckoutStep
    items: list[CartItemRead]
    total: Decimal
    payment_code: str | None = None
    order: Order | None = None
    persisted: bool | None = None

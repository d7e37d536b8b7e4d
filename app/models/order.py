# app/models/order.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal

from sqlmodel import SQLModel, Field

from app.models.product import CartItem

OrderStatus = Literal["pending", "paid", "delivered"]
PaymentMethod = Literal["PIX"]


class Order(SQLModel):
    """
    Completed checkout, appended to the orders collection blob.

    - items: cart snapshot at confirmation time
    - total: sum of price * quantity over items
    - user_id is not checked against the users collection

    Orders are written once and never updated.
    """

    id: str
    user_id: str
    items: list[CartItem]
    total: Decimal = Field(ge=0)

    # Checkout only ever produces "paid"
    status: OrderStatus = "paid"

    date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    payment_method: PaymentMethod = "PIX"

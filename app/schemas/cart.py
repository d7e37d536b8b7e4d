# app/schemas/cart.py
from decimal import Decimal

from sqlmodel import SQLModel, Field


class CartItemAdd(SQLModel):
    """
    Payload for adding one unit of a product to the cart.
    """

    product_id: str = Field(min_length=1)


class CartItemRead(SQLModel):
    """
    Read model for a single cart item, including line_total.
    """

    id: str
    name: str
    unit: str
    category: str
    image_url: str
    price: Decimal
    quantity: int
    line_total: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.

    recipe_available tells the client whether to offer recipe suggestions.
    """

    items: list[CartItemRead]
    total_quantity: int
    total_price: Decimal
    recipe_available: bool = False

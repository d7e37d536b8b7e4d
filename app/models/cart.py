# app/models/cart.py
from decimal import Decimal

from app.models.product import CartItem, Product


class Cart:
    """
    In-memory shopping cart for the current client.

    - At most one item per product id; adding again bumps quantity.
    - Quantities are always >= 1: removing drops the whole line.
    - Never persisted; lost on logout or restart.
    - No stock checks here (callers block sold-out products).
    """

    def __init__(self) -> None:
        self._items: list[CartItem] = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def add(self, product: Product) -> CartItem:
        for item in self._items:
            if item.id == product.id:
                item.quantity += 1
                return item

        item = CartItem.model_validate({**product.model_dump(), "quantity": 1})
        self._items.append(item)
        return item

    def remove(self, product_id: str) -> None:
        self._items = [it for it in self._items if it.id != product_id]

    def clear(self) -> None:
        self._items = []

    def total(self) -> Decimal:
        return sum((it.line_total for it in self._items), Decimal("0"))

    def count(self) -> int:
        return sum(it.quantity for it in self._items)

    def snapshot(self) -> list[CartItem]:
        """Independent copies, safe to store in an order."""
        return [it.model_copy(deep=True) for it in self._items]

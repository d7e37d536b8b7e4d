# app/services/cart_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.storefront import Storefront
from app.models.cart import Cart
from app.models.product import CartItem
from app.services.product_service import ProductService
from app.schemas.cart import CartItemRead, CartSummary

settings = get_settings()


def to_item_read(item: CartItem) -> CartItemRead:
    return CartItemRead(
        id=item.id,
        name=item.name,
        unit=item.unit,
        category=item.category,
        image_url=item.image_url,
        price=item.price,
        quantity=item.quantity,
        line_total=item.line_total,
    )


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - resolve products from the catalog
      - block sold-out products (stock <= 0) before they reach the cart
      - refuse changes while a checkout attempt is open
      - compute line totals and cart totals
    """

    def __init__(self, product_service: ProductService):
        self.product_service = product_service

    @staticmethod
    def _ensure_unlocked(storefront: Storefront) -> None:
        if storefront.cart_locked():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cart cannot change during checkout",
            )

    def get_cart_summary(self, cart: Cart) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead (with line_total)
          - total_quantity
          - total_price
        """
        return CartSummary(
            items=[to_item_read(it) for it in cart.items],
            total_quantity=cart.count(),
            total_price=cart.total(),
            recipe_available=bool(settings.GEMINI_API_KEY),
        )

    def add_to_cart(self, session: Session, storefront: Storefront, product_id: str) -> CartSummary:
        """
        Add one unit of a product to the cart.

        Rules:
          - product must exist in the catalog
          - stock must be > 0 (quantity already in the cart is not checked)
          - no open checkout attempt (409)
        """
        product = self.product_service.get_product(session, product_id)
        if product.stock <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is out of stock",
            )

        with storefront.lock:
            self._ensure_unlocked(storefront)
            storefront.cart.add(product)
            return self.get_cart_summary(storefront.cart)

    def remove_item(self, storefront: Storefront, product_id: str) -> CartSummary:
        """
        Remove a product line from the cart (no-op if absent).
        """
        with storefront.lock:
            self._ensure_unlocked(storefront)
            storefront.cart.remove(product_id)
            return self.get_cart_summary(storefront.cart)

    def clear_cart(self, storefront: Storefront) -> CartSummary:
        with storefront.lock:
            self._ensure_unlocked(storefront)
            storefront.cart.clear()
            return self.get_cart_summary(storefront.cart)

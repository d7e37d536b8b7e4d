# app/core/storefront.py
import threading
from dataclasses import dataclass, field

from fastapi import Request

from app.models.cart import Cart
from app.models.checkout import CheckoutAttempt
from app.models.view import ViewCoordinator


@dataclass
class Storefront:
    """
    Transient client state: everything that is not in the record store.

    One instance lives on app.state for the process (single client).
    Sync routes run in a threadpool, so every read-modify-write of the
    cart, checkout or recipe flag happens under `lock`.
    """

    cart: Cart = field(default_factory=Cart)
    view: ViewCoordinator = field(default_factory=ViewCoordinator)
    checkout: CheckoutAttempt | None = None

    # Set while a recipe request is in flight
    recipe_pending: bool = False

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def cart_locked(self) -> bool:
        """True while a checkout attempt is reviewing or awaiting payment."""
        return self.checkout is not None and self.checkout.is_open

    def reset(self) -> None:
        """Drop cart and checkout (on logout)."""
        with self.lock:
            self.cart.clear()
            self.checkout = None


def get_storefront(request: Request) -> Storefront:
    """FastAPI dependency returning the process-wide Storefront."""
    return request.app.state.storefront

# app/models/view.py
from typing import Literal

from fastapi import HTTPException, status

from app.models.user import User

ViewState = Literal[
    "HOME",
    "LOGIN",
    "REGISTER",
    "ADMIN_PRODUCTS",
    "CART",
    "CHECKOUT",
    "PROFILE",
]


class ViewCoordinator:
    """
    Holds the single "current screen" of the storefront client.

    Client-requested screens go through show(), which enforces:
      - ADMIN_PRODUCTS: admin only
      - PROFILE: authenticated only

    Flows (login, logout, checkout) move the screen with go().
    """

    def __init__(self, initial: ViewState = "HOME"):
        self.current: ViewState = initial

    def go(self, view: ViewState) -> ViewState:
        self.current = view
        return view

    def show(self, view: ViewState, user: User | None) -> ViewState:
        if view == "PROFILE" and user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
            )
        if view == "ADMIN_PRODUCTS" and (user is None or user.role != "ADMIN"):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required",
            )
        return self.go(view)

# app/routers/view.py
from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.core.storefront import Storefront, get_storefront
from app.models.user import User
from app.schemas.view import ViewRead, ViewUpdate

router = APIRouter(prefix="/view", tags=["View"])


def _to_read(storefront: Storefront, user: User | None) -> ViewRead:
    return ViewRead(
        view=storefront.view.current,
        is_admin=user is not None and user.role == "ADMIN",
        cart_count=storefront.cart.count(),
    )


@router.get("", response_model=ViewRead)
def get_view(
    storefront: Storefront = Depends(get_storefront),
    current_user: User | None = Depends(get_current_user),
):
    """
    Current screen, plus what the navbar needs to render it.
    """
    return _to_read(storefront, current_user)


@router.put("", response_model=ViewRead)
def set_view(
    payload: ViewUpdate,
    storefront: Storefront = Depends(get_storefront),
    current_user: User | None = Depends(get_current_user),
):
    """
    Switch screen. ADMIN_PRODUCTS needs an admin, PROFILE a logged-in user.
    """
    storefront.view.show(payload.view, current_user)
    return _to_read(storefront, current_user)

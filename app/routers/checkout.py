# app/routers/checkout.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import get_current_user
from app.core.storefront import Storefront, get_storefront
from app.database import get_session
from app.models.user import User
from app.repositories.record_repo import RecordRepository
from app.schemas.checkout import CheckoutRead
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

router = APIRouter(prefix="/checkout", tags=["Checkout"])

order_service = OrderService(RecordRepository())
service = CheckoutService(order_service)


@router.post("", response_model=CheckoutRead, status_code=status.HTTP_201_CREATED)
def start_checkout(storefront: Storefront = Depends(get_storefront)):
    """
    Start a checkout for the current cart (step "review").
    """
    return service.start(storefront)


@router.get("", response_model=CheckoutRead)
def get_checkout(storefront: Storefront = Depends(get_storefront)):
    return service.get(storefront)


@router.post("/pay", response_model=CheckoutRead)
def pay_with_pix(storefront: Storefront = Depends(get_storefront)):
    """
    Move to "awaiting_payment" and expose the PIX payment code.
    """
    return service.proceed_to_payment(storefront)


@router.post("/back", response_model=CheckoutRead)
def back_to_review(storefront: Storefront = Depends(get_storefront)):
    return service.back_to_review(storefront)


@router.post("/confirm", response_model=CheckoutRead)
def confirm_payment(
    session: Session = Depends(get_session),
    storefront: Storefront = Depends(get_storefront),
    current_user: User | None = Depends(get_current_user),
):
    """
    Confirm payment and place the order.

    Guests get 401 and the client is sent to the login screen; the
    cart is kept.
    """
    return service.confirm(session, storefront, current_user)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def close_checkout(storefront: Storefront = Depends(get_storefront)):
    """
    Leave checkout (cancel from review, or finish after confirmation).
    """
    service.close(storefront)

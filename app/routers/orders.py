# app/routers/orders.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth, require_admin
from app.database import get_session
from app.models.order import Order
from app.models.user import User
from app.repositories.record_repo import RecordRepository
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

service = OrderService(RecordRepository())


# -------- User-facing endpoints --------


@router.get("/me", response_model=list[Order])
def list_my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    List the logged-in user's orders, newest first.
    """
    return service.list_user_orders(session, current_user.id)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[Order],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(session: Session = Depends(get_session)):
    """
    List all orders (admin only).
    """
    return service.list_orders(session)

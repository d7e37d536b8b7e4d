# app/services/order_service.py
from sqlmodel import Session

from app.models.order import Order
from app.models.record import Collection
from app.repositories.record_repo import RecordRepository, StoreOutcome


class OrderService:
    """
    Business logic for orders.

    Orders are append-only: created once at checkout, never updated.
    """

    def __init__(self, repo: RecordRepository):
        self.repo = repo

    def list_orders(self, session: Session) -> list[Order]:
        """
        All orders, oldest first (admin only).
        """
        return self.repo.read_list(session, Collection.ORDERS, Order) or []

    def list_user_orders(self, session: Session, user_id: str) -> list[Order]:
        """
        Orders placed by one user, newest first.
        """
        orders = [o for o in self.list_orders(session) if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.date, reverse=True)

    def record_order(self, session: Session, order: Order) -> StoreOutcome:
        orders = self.list_orders(session)
        orders.append(order)
        return self.repo.write(session, Collection.ORDERS, orders)

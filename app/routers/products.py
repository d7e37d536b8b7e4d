# app/routers/products.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.models.product import Product
from app.repositories.record_repo import RecordRepository
from app.schemas.product import ProductWrite
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = RecordRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[Product])
def list_products(session: Session = Depends(get_session)):
    """
    List the catalog in stored order.

    The first call on an empty store seeds four products.
    """
    return service.get_products(session)


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, session: Session = Depends(get_session)):
    return service.get_product(session, product_id)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def save_product(
    payload: ProductWrite,
    session: Session = Depends(get_session),
):
    """
    Create a product, or replace the one with the same id (admin only).
    """
    return service.upsert_from_form(session, payload)


@router.put(
    "/{product_id}",
    response_model=Product,
    dependencies=[Depends(require_admin)],
)
def replace_product(
    product_id: str,
    payload: ProductWrite,
    session: Session = Depends(get_session),
):
    """
    Fully replace a product's fields (admin only).

    An unknown id is appended as a new product.
    """
    return service.upsert_from_form(session, payload, product_id=product_id)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Delete a product (admin only). Unknown ids are a no-op.
    """
    service.delete_from_admin(session, product_id)

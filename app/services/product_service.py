# app/services/product_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.product import Product, SEED_PRODUCTS
from app.models.record import Collection
from app.repositories.record_repo import RecordRepository, StoreOutcome
from app.schemas.product import ProductWrite

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - seed the catalog on first read
      - upsert by id, preserving catalog order
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: RecordRepository):
        self.repo = repo

    # ----- Reads -----

    def get_products(self, session: Session) -> list[Product]:
        """
        Return the catalog.

        A missing or unreadable products blob is replaced by the seed
        catalog, which is persisted before returning. An empty but valid
        catalog stays empty.
        """
        products = self.repo.read_list(session, Collection.PRODUCTS, Product)
        if products is not None:
            return products

        seeded = [p.model_copy() for p in SEED_PRODUCTS]
        outcome = self.repo.write(session, Collection.PRODUCTS, seeded)
        if outcome.ok:
            logger.info("Seeded catalog with %d products", len(seeded))
        else:
            logger.warning("Seed catalog not persisted: %s", outcome.error)
        return seeded

    def find_product(self, session: Session, product_id: str) -> Product | None:
        return next(
            (p for p in self.get_products(session) if p.id == product_id),
            None,
        )

    def get_product(self, session: Session, product_id: str) -> Product:
        product = self.find_product(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    # ----- Writes -----

    def save_product(self, session: Session, product: Product) -> StoreOutcome:
        """
        Upsert by id: replace in place if present, else append.
        """
        products = self.get_products(session)
        for idx, existing in enumerate(products):
            if existing.id == product.id:
                products[idx] = product
                break
        else:
            products.append(product)
        return self.repo.write(session, Collection.PRODUCTS, products)

    def delete_product(self, session: Session, product_id: str) -> StoreOutcome:
        """
        Remove by id. Unknown ids leave the catalog unchanged.
        """
        products = self.get_products(session)
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return StoreOutcome.success()
        return self.repo.write(session, Collection.PRODUCTS, remaining)

    # ----- Admin form -----

    def upsert_from_form(
        self,
        session: Session,
        payload: ProductWrite,
        product_id: str | None = None,
    ) -> Product:
        """
        Build a Product from the admin form and save it.

        - product_id (from the URL) wins over payload.id.
        - Without any id, a new one is generated.

        Raises:
            HTTPException(503): if the catalog could not be persisted.
        """
        data = payload.model_dump(exclude={"id"})
        data["id"] = product_id or payload.id or uuid.uuid4().hex
        product = Product.model_validate(data)

        outcome = self.save_product(session, product)
        if not outcome.ok:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Catalog could not be saved",
            )
        return product

    def delete_from_admin(self, session: Session, product_id: str) -> None:
        outcome = self.delete_product(session, product_id)
        if not outcome.ok:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Catalog could not be saved",
            )

# app/models/product.py
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Product(SQLModel):
    """
    Catalog entry, kept inside the products collection blob.

    stock is informational: checkout never decrements it, but a
    product at 0 cannot be added to the cart.
    """

    id: str
    name: str = Field(max_length=100)
    description: str = ""
    price: Decimal = Field(ge=0, decimal_places=2)
    unit: str = Field(
        max_length=30,
        description="Free-text measurement label: kg, un, caixa...",
    )
    category: str = Field(max_length=50)
    image_url: str = ""
    stock: int = Field(default=0, ge=0)


class CartItem(Product):
    """
    A product projected with a quantity.

    Lives in the in-memory cart and inside order snapshots only.
    """

    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


# Seed catalog written on first read of an absent products blob
SEED_PRODUCTS: list[Product] = [
    Product(
        id="1",
        name="Tomate Orgânico",
        description="Tomates vermelhos e suculentos, cultivados sem agrotóxicos.",
        price=Decimal("8.50"),
        unit="kg",
        category="Legumes",
        image_url="https://picsum.photos/seed/tomato/400/400",
        stock=50,
    ),
    Product(
        id="2",
        name="Alface Crespa",
        description="Folhas verdes crocantes, colhidas hoje de manhã.",
        price=Decimal("3.00"),
        unit="un",
        category="Verduras",
        image_url="https://picsum.photos/seed/lettuce/400/400",
        stock=30,
    ),
    Product(
        id="3",
        name="Cenoura Baby",
        description="Cenouras doces e crocantes, perfeitas para snacks.",
        price=Decimal("6.20"),
        unit="pacote",
        category="Legumes",
        image_url="https://picsum.photos/seed/carrot/400/400",
        stock=25,
    ),
    Product(
        id="4",
        name="Morangos Frescos",
        description="Morangos doces direto do produtor.",
        price=Decimal("15.00"),
        unit="caixa",
        category="Frutas",
        image_url="https://picsum.photos/seed/strawberry/400/400",
        stock=15,
    ),
]

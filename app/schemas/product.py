# app/schemas/product.py
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ProductWrite(SQLModel):
    """
    Admin form payload for creating or replacing a product.

    - id is optional: if omitted, a new one is generated (create).
    - A given id that matches an existing product replaces it in place.
    - image_url may be any URL (upload/encoding happens client-side).
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    name: str = Field(max_length=100)
    description: str = ""
    price: Decimal = Field(ge=0, decimal_places=2)
    unit: str = Field(max_length=30)
    category: str = Field(max_length=50)
    image_url: str = ""
    stock: int = Field(default=0, ge=0)

    @field_validator("name", "unit", "category")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("id")
    @classmethod
    def normalize_id(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("description", "image_url")
    @classmethod
    def strip_optional(cls, v: str) -> str:
        return v.strip()

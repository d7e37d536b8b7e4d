# app/models/record.py
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class Collection(str, Enum):
    """
    The four independently addressable blobs of the record store.
    """

    USERS = "org_users"
    PRODUCTS = "org_products"
    ORDERS = "org_orders"
    CURRENT_USER = "org_current_user"


class Record(SQLModel, table=True):
    """
    One whole collection, serialized as JSON under a fixed key.

    There is no per-entity row: every write replaces the full blob.
    """

    __tablename__ = "records"

    key: str = Field(
        primary_key=True,
        max_length=64,
        description="Collection key, see Collection",
    )

    value: str = Field(
        description="JSON-serialized collection (or single record)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last overwrite timestamp (UTC)",
    )

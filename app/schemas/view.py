# app/schemas/view.py
from pydantic import ConfigDict
from sqlmodel import SQLModel

from app.models.view import ViewState


class ViewUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    view: ViewState


class ViewRead(SQLModel):
    view: ViewState
    is_admin: bool
    cart_count: int

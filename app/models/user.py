# app/models/user.py
from typing import Literal

from sqlmodel import SQLModel, Field

# "guest" is represented by an empty current-session slot.
Role = Literal["CUSTOMER", "ADMIN"]


class User(SQLModel):
    """
    Stored account, kept inside the users collection blob.

    Identity:
      - id: generated at registration ("admin" for the synthesized admin)
      - email: login key; not unique, first match wins at login

    password_hash is None for the copy kept in the current-session slot.
    """

    id: str
    name: str = Field(max_length=100)
    email: str
    password_hash: str | None = Field(
        default=None,
        description="pbkdf2_sha256 hash, see app.core.security",
    )
    role: Role = "CUSTOMER"

    def without_password(self) -> "User":
        return self.model_copy(update={"password_hash": None})

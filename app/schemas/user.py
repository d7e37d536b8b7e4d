# app/schemas/user.py
from pydantic import ConfigDict, field_validator
from pydantic.networks import validate_email
from sqlmodel import SQLModel, Field

from app.models.user import Role


class UserRegister(SQLModel):
    """
    Registration form.

    Validation rules:
      - email must be a valid address; it is stored as typed, since
        login compares emails exactly
      - name and password cannot be empty or whitespace
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: str = Field(max_length=254)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, v: str) -> str:
        validate_email(v)
        return v

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("password cannot be empty")
        return v


class UserLogin(SQLModel):
    """Login form. Emails are matched exactly, so no EmailStr normalization."""

    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class UserRead(SQLModel):
    """Response schema returned to clients (never carries the password hash)."""

    id: str
    name: str
    email: str
    role: Role

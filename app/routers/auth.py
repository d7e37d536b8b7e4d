# app/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_auth, user_service
from app.core.storefront import Storefront, get_storefront
from app.database import get_session
from app.models.user import User
from app.schemas.user import UserLogin, UserRead, UserRegister

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegister,
    session: Session = Depends(get_session),
    storefront: Storefront = Depends(get_storefront),
):
    """
    Create a customer account and log it in.

    Duplicate emails are accepted; the first account wins at login.
    """
    user = user_service.register_and_login(session, payload)
    storefront.view.go("HOME")
    return user


@router.post("/login", response_model=UserRead)
def login(
    payload: UserLogin,
    session: Session = Depends(get_session),
    storefront: Storefront = Depends(get_storefront),
):
    """
    Log in and store the user in the session slot.

    Returns 401 "Invalid email or password" for any failure.
    """
    user = user_service.login(session, payload.email, payload.password)
    storefront.view.go("HOME")
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    session: Session = Depends(get_session),
    storefront: Storefront = Depends(get_storefront),
):
    """
    Clear the session slot, empty the cart and drop any checkout.
    """
    user_service.logout(session)
    with storefront.lock:
        storefront.reset()
        storefront.view.go("LOGIN")


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the logged-in user.
    """
    return current_user

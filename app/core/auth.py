# app/core/auth.py
from fastapi import Depends, HTTPException, status
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.repositories.record_repo import RecordRepository
from app.services.user_service import UserService

user_service = UserService(RecordRepository())


def get_current_user(session: Session = Depends(get_session)) -> User | None:
    """
    Resolve the current user from the session slot of the record store.

    Returns:
        User (without password hash) if someone is logged in, else None
        for guests.
    """
    return user_service.get_current_user(session)


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    If attached to a route, guests will be rejected with 401.

    Raises:
        HTTPException(401): if user is None.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Route is accessible only if:
      - user.role == "ADMIN"

    Raises:
        HTTPException(403): if role is not admin.
    """
    if user.role != "ADMIN":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user

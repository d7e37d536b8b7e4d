# app/services/user_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.security import credentials_match, hash_password, verify_password
from app.models.record import Collection
from app.models.user import User
from app.repositories.record_repo import RecordRepository, StoreOutcome
from app.schemas.user import UserRegister

logger = logging.getLogger(__name__)

settings = get_settings()

ADMIN_USER_ID = "admin"
ADMIN_DISPLAY_NAME = "Administrador"


class UserService:
    """
    Business logic for accounts and the current session.

    Responsibilities:
      - registration (no email uniqueness, first match wins at login)
      - password verification and the configured admin shortcut
      - the single current-session slot
    """

    def __init__(self, repo: RecordRepository):
        self.repo = repo

    # ----- Accounts -----

    def list_users(self, session: Session) -> list[User]:
        return self.repo.read_list(session, Collection.USERS, User) or []

    def register_user(
        self,
        session: Session,
        payload: UserRegister,
    ) -> tuple[User, StoreOutcome]:
        """
        Append a new CUSTOMER account.

        Returns:
            The stored user (with hash) and the store outcome.
        """
        user = User(
            id=uuid.uuid4().hex,
            name=payload.name,
            email=str(payload.email),
            password_hash=hash_password(payload.password),
            role="CUSTOMER",
        )
        users = self.list_users(session)
        users.append(user)
        return user, self.repo.write(session, Collection.USERS, users)

    # ----- Session -----

    def authenticate(self, session: Session, email: str, password: str) -> User | None:
        """
        Resolve a login.

        Flow:
          1. Configured admin pair => synthesized ADMIN (users collection ignored).
          2. First stored user with that email whose password verifies.
          3. Otherwise None (unknown email and wrong password look the same).

        On success the password-less user becomes the current session.
        """
        if credentials_match(email, password, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD):
            user = User(
                id=ADMIN_USER_ID,
                name=ADMIN_DISPLAY_NAME,
                email=email,
                role="ADMIN",
            )
        else:
            user = next(
                (
                    u
                    for u in self.list_users(session)
                    if u.email == email and verify_password(password, u.password_hash)
                ),
                None,
            )
            if user is None:
                logger.info("Failed login for %s", email)
                return None

        safe_user = user.without_password()
        self.start_session(session, safe_user)
        return safe_user

    def start_session(self, session: Session, user: User) -> StoreOutcome:
        outcome = self.repo.write(session, Collection.CURRENT_USER, user.without_password())
        if not outcome.ok:
            logger.warning("Session for %s not persisted: %s", user.id, outcome.error)
        return outcome

    def logout(self, session: Session) -> StoreOutcome:
        return self.repo.clear(session, Collection.CURRENT_USER)

    def get_current_user(self, session: Session) -> User | None:
        return self.repo.read_one(session, Collection.CURRENT_USER, User)

    # ----- HTTP helpers -----

    def register_and_login(self, session: Session, payload: UserRegister) -> User:
        """
        Register a customer and start their session.

        Raises:
            HTTPException(503): if the account could not be persisted.
        """
        user, outcome = self.register_user(session, payload)
        if not outcome.ok:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Account could not be saved",
            )
        safe_user = user.without_password()
        self.start_session(session, safe_user)
        return safe_user

    def login(self, session: Session, email: str, password: str) -> User:
        user = self.authenticate(session, email, password)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )
        return user

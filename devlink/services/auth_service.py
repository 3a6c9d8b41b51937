"""
Authentication and identity related use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.exc import IntegrityError

from devlink.core.errors import AccountExistsError, InvalidCredentialsError
from devlink.core.security import hash_password, needs_rehash, verify_password
from devlink.db.models import User
from devlink.repositories.sql_repository import SQLRepository
from devlink.services.session_service import SessionIssuer, get_session_issuer

logger = logging.getLogger(__name__)


@dataclass
class LoginSuccess:
    user: User
    session_token: str


@dataclass
class AuthService:
    """Handles signup, login and logout flows."""

    repository: SQLRepository = field(default_factory=SQLRepository)
    issuer: Optional[SessionIssuer] = None

    def __post_init__(self):
        if self.issuer is None:
            self.issuer = get_session_issuer()

    # -------------------------------------- signup --------------------------------------
    def signup(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        age: int | None = None,
        **profile,
    ) -> User:
        raw_email = (email or "").strip().lower()
        if self.repository.get_user_by_email(raw_email):
            raise AccountExistsError()
        try:
            user = self.repository.create_user(
                raw_email,
                hash_password(password),
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                age=age,
                **profile,
            )
        except IntegrityError as exc:
            # Lost a race against a concurrent signup with the same e-mail.
            raise AccountExistsError() from exc
        logger.info("User %s signed up", user.id)
        return user

    # -------------------------------------- login --------------------------------------
    def login(self, email: str, password: str) -> LoginSuccess:
        raw_email = (email or "").strip().lower()
        user = self.repository.get_user_by_email(raw_email) if raw_email else None
        # verify_password runs even without a user so both failures look alike.
        if not verify_password(password, user.password_hash if user else None) or not user:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        if needs_rehash(user.password_hash):
            self.repository.update_user_password(user.id, hash_password(password))
        token = self.issuer.issue(user.id)
        logger.info("User %s logged in", user.id)
        return LoginSuccess(user=user, session_token=token)

    def logout(self, user: User) -> None:
        # Sessions are self-contained; the router clears the cookie.
        logger.info("User %s logged out", user.id)

"""Session helpers (signed tokens, cookies, request authentication)."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable

from fastapi import Request, Response
from itsdangerous import BadData, URLSafeSerializer

from devlink.core.config import get_settings
from devlink.core.errors import SessionExpiredError, SessionInvalidError, SessionMissingError
from devlink.db.models import User
from devlink.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)

SESSION_SALT = "devlink.session.v1"
DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class SessionClaims:
    subject: str
    issued_at: int
    expires_at: int


@dataclass
class SessionIssuer:
    """
    Mints and verifies self-contained session tokens.

    The token is an itsdangerous-signed payload ``{sub, iat, exp}``. Expiry is
    checked against ``clock`` so tests can pin the current time.
    """

    secret_key: str
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    clock: Callable[[], float] = field(default=time.time)

    def __post_init__(self):
        if not self.secret_key:
            raise RuntimeError("SECRET_KEY must be configured to sign sessions.")
        self._serializer = URLSafeSerializer(self.secret_key, salt=SESSION_SALT)

    def _now(self) -> int:
        return int(self.clock())

    def issue(self, user_id: str) -> str:
        now = self._now()
        return self._serializer.dumps({"sub": user_id, "iat": now, "exp": now + self.ttl_seconds})

    def claims(self, token: str | None) -> SessionClaims:
        if not token:
            raise SessionMissingError()
        try:
            data = self._serializer.loads(token)
        except BadData as exc:
            raise SessionInvalidError() from exc
        if not isinstance(data, dict):
            raise SessionInvalidError()
        subject, issued_at, expires_at = data.get("sub"), data.get("iat"), data.get("exp")
        if not isinstance(subject, str) or not subject or not isinstance(expires_at, int):
            raise SessionInvalidError()
        if self._now() >= expires_at:
            raise SessionExpiredError()
        return SessionClaims(subject=subject, issued_at=int(issued_at or 0), expires_at=expires_at)

    def verify(self, token: str | None) -> str:
        """Return the user id embedded in a valid token."""
        return self.claims(token).subject


@lru_cache
def get_session_issuer() -> SessionIssuer:
    settings = get_settings()
    return SessionIssuer(secret_key=settings.secret_key, ttl_seconds=max(60, settings.session_ttl_seconds))


def read_token(request: Request) -> str | None:
    """Take the session token from a bearer header, falling back to the cookie."""
    header = request.headers.get("authorization") or ""
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(get_settings().session_cookie_name) or None


def require_user(request: Request) -> User:
    """
    FastAPI dependency guarding every authenticated route.

    Raises an AuthError (401) before the handler body runs when the token is
    missing, forged, expired, or names a user that no longer exists.
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        return user
    try:
        user_id = get_session_issuer().verify(read_token(request))
    except (SessionInvalidError, SessionExpiredError) as exc:
        logger.warning("Rejected session on %s %s: %s", request.method, request.url.path, exc.kind)
        raise
    user = SQLRepository().get_user(user_id)
    if not user:
        logger.warning("Session subject %s no longer exists", user_id)
        raise SessionInvalidError()
    request.state.user = user
    return user


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        token,
        httponly=True,
        secure=settings.is_prod,
        samesite="none" if settings.is_prod else "lax",
        max_age=settings.session_ttl_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_prod,
        samesite="none" if settings.is_prod else "lax",
    )

"""
Configuration helpers for the devlink backend.

Routers and services read settings through get_settings() instead of touching
os.environ directly, so tests can swap the environment and clear the cache.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_SECRET_KEY = "devlink-dev-secret-change-me"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    secret_key: str
    session_ttl_seconds: int
    session_cookie_name: str
    client_urls: tuple[str, ...]
    log_level: str
    login_rate_limit: int
    login_rate_window_seconds: int
    forwarded_allow_ips: tuple[str, ...]

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _origins(value: str | None) -> tuple[str, ...]:
        items = [item.strip().rstrip("/") for item in (value or "").split(",")]
        items = [item for item in items if item]
        return tuple(items) or ("http://localhost:5173",)

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    secret = os.getenv("SECRET_KEY", "")
    if not secret and app_env in {"dev", "test"}:
        secret = DEV_SECRET_KEY

    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", ""),
        secret_key=secret,
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "604800"), 604800),
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "token"),
        client_urls=_origins(os.getenv("CLIENT_URL")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        login_rate_window_seconds=_int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"), 60),
        forwarded_allow_ips=tuple(
            item.strip() for item in (os.getenv("FORWARDED_ALLOW_IPS") or "").split(",") if item.strip()
        ),
    )

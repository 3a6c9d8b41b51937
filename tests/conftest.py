from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the devlink package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from devlink.core import config as core_config  # noqa: E402
from devlink.core.rate_limiter import reset_limits  # noqa: E402
from devlink.db import create_all, drop_all  # noqa: E402
from devlink.db import session as db_session  # noqa: E402
from devlink.repositories.sql_repository import SQLRepository  # noqa: E402
from devlink.services import session_service  # noqa: E402

TEST_SECRET = "test-secret-key"
STRONG_PASSWORD = "Passw0rd!"


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    session_service.get_session_issuer.cache_clear()


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Temporary SQLite database plus a deterministic signing key."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("SECRET_KEY", TEST_SECRET)
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("CLIENT_URL", raising=False)
    _clear_caches()
    reset_limits()

    engine = db_session.get_engine()
    drop_all(engine)
    create_all(engine)

    yield db_file

    drop_all(engine)
    engine.dispose()
    _clear_caches()


@pytest.fixture()
def repo(db_env) -> SQLRepository:
    return SQLRepository()


@pytest.fixture()
def make_user(repo):
    """Create users straight through the repository (no password hashing cost)."""
    counter = {"n": 0}

    def _make(first_name: str = "Dev", email: str | None = None, password_hash: str = "unused"):
        counter["n"] += 1
        address = email or f"user{counter['n']}@example.com"
        return repo.create_user(address, password_hash, first_name=first_name, last_name="Tester")

    return _make

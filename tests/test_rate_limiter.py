from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from devlink.app import create_app
from devlink.core import rate_limiter
from devlink.core.config import get_settings
from devlink.core.errors import RateLimitedError

from conftest import STRONG_PASSWORD

LIMIT = 3
TOO_MANY = "Too many requests. Try again shortly."


def _throttled_client(monkeypatch, trusted: str | None = None) -> TestClient:
    monkeypatch.setenv("LOGIN_RATE_LIMIT", str(LIMIT))
    monkeypatch.setenv("LOGIN_RATE_WINDOW_SECONDS", "60")
    if trusted is None:
        monkeypatch.delenv("FORWARDED_ALLOW_IPS", raising=False)
    else:
        monkeypatch.setenv("FORWARDED_ALLOW_IPS", trusted)
    get_settings.cache_clear()
    return TestClient(create_app())


def _bad_login(client: TestClient, headers: dict | None = None):
    return client.post(
        "/login",
        json={"email": "nobody@example.com", "password": STRONG_PASSWORD},
        headers=headers or {},
    )


def test_login_is_throttled_after_limit(db_env, monkeypatch):
    with _throttled_client(monkeypatch) as client:
        for _ in range(LIMIT):
            assert _bad_login(client).status_code == 400
        r = _bad_login(client)
    assert r.status_code == 429
    assert r.json() == {"message": TOO_MANY}


def test_spoofed_forwarded_for_does_not_reset_count(db_env, monkeypatch):
    with _throttled_client(monkeypatch) as client:
        for i in range(LIMIT):
            assert _bad_login(client, {"X-Forwarded-For": f"10.0.0.{i}"}).status_code == 400
        for i in range(LIMIT, LIMIT + 3):
            r = _bad_login(client, {"X-Forwarded-For": f"10.0.0.{i}"})
            assert r.status_code == 429


def test_forwarded_for_is_honoured_for_trusted_proxy(db_env, monkeypatch):
    with _throttled_client(monkeypatch, trusted="testclient") as client:
        for _ in range(LIMIT):
            assert _bad_login(client, {"X-Forwarded-For": "10.0.0.1"}).status_code == 400
        assert _bad_login(client, {"X-Forwarded-For": "10.0.0.1"}).status_code == 429
        assert _bad_login(client, {"X-Forwarded-For": "10.0.0.2, 172.16.0.9"}).status_code == 400


def test_expired_windows_are_evicted(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(rate_limiter.time, "time", lambda: now[0])
    limiter = rate_limiter._RateLimiter()

    limiter.check("login:a", 1, 10)
    limiter.check("login:b", 1, 10)
    assert len(limiter) == 2
    with pytest.raises(RateLimitedError):
        limiter.check("login:a", 1, 10)

    now[0] = 1011.0
    limiter.check("login:c", 1, 10)
    assert len(limiter) == 1
    # a fresh window for a previously throttled key
    limiter.check("login:a", 1, 10)


def test_zero_limit_disables_throttle():
    limiter = rate_limiter._RateLimiter()
    for _ in range(5):
        limiter.check("login:a", 0, 10)
    assert len(limiter) == 0

from __future__ import annotations

import pytest

from devlink.core.errors import SessionExpiredError, SessionInvalidError, SessionMissingError
from devlink.services.session_service import DEFAULT_TTL_SECONDS, SessionIssuer

USER_ID = "0123456789abcdef0123456789abcdef"


class FakeClock:
    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_issue_and_verify_returns_subject():
    issuer = SessionIssuer(secret_key="k1", clock=FakeClock(1_000))
    token = issuer.issue(USER_ID)

    assert issuer.verify(token) == USER_ID
    claims = issuer.claims(token)
    assert claims.issued_at == 1_000
    assert claims.expires_at == 1_000 + DEFAULT_TTL_SECONDS


def test_default_ttl_is_seven_days():
    assert DEFAULT_TTL_SECONDS == 7 * 24 * 60 * 60


def test_token_expires_exactly_at_ttl():
    clock = FakeClock(1_000)
    issuer = SessionIssuer(secret_key="k1", clock=clock)
    token = issuer.issue(USER_ID)
    expires_at = 1_000 + DEFAULT_TTL_SECONDS

    clock.now = expires_at - 1
    assert issuer.verify(token) == USER_ID

    for now in (expires_at, expires_at + 1):
        clock.now = now
        with pytest.raises(SessionExpiredError) as info:
            issuer.verify(token)
        assert info.value.kind == "expired"


def test_missing_token_is_reported_as_missing():
    issuer = SessionIssuer(secret_key="k1")
    for empty in (None, ""):
        with pytest.raises(SessionMissingError) as info:
            issuer.verify(empty)
        assert info.value.kind == "missing"


def test_tampered_or_foreign_tokens_are_invalid():
    issuer = SessionIssuer(secret_key="k1")
    token = issuer.issue(USER_ID)

    with pytest.raises(SessionInvalidError):
        other_payload = issuer.issue("f" * 32).rsplit(".", 1)[0]
        issuer.verify(other_payload + "." + token.rsplit(".", 1)[1])
    with pytest.raises(SessionInvalidError):
        issuer.verify("not-a-token")
    with pytest.raises(SessionInvalidError):
        SessionIssuer(secret_key="other-key").verify(token)


def test_signing_key_is_required():
    with pytest.raises(RuntimeError):
        SessionIssuer(secret_key="")

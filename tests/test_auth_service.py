from __future__ import annotations

import pytest

from devlink.core.errors import AccountExistsError, InvalidCredentialsError
from devlink.services.auth_service import AuthService
from devlink.services.session_service import SessionIssuer

from conftest import STRONG_PASSWORD, TEST_SECRET


@pytest.fixture()
def svc(repo) -> AuthService:
    return AuthService(repository=repo, issuer=SessionIssuer(secret_key=TEST_SECRET))


def test_signup_hashes_password_and_normalizes_email(svc, repo):
    user = svc.signup("Ana", "Lima", "Ana@Example.com", STRONG_PASSWORD, age=30)

    stored = repo.get_user(user.id)
    assert stored.email == "ana@example.com"
    assert stored.password_hash != STRONG_PASSWORD
    assert stored.password_hash.startswith("$argon2")
    assert stored.age == 30


def test_signup_rejects_existing_email(svc):
    svc.signup("Ana", "Lima", "ana@example.com", STRONG_PASSWORD)
    with pytest.raises(AccountExistsError):
        svc.signup("Other", "Person", "ANA@example.com", STRONG_PASSWORD)


def test_login_issues_token_for_user(svc):
    user = svc.signup("Ana", "Lima", "ana@example.com", STRONG_PASSWORD)
    outcome = svc.login(" ana@example.com ", STRONG_PASSWORD)

    assert outcome.user.id == user.id
    assert svc.issuer.verify(outcome.session_token) == user.id


def test_wrong_password_and_unknown_email_fail_the_same_way(svc):
    svc.signup("Ana", "Lima", "ana@example.com", STRONG_PASSWORD)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        svc.login("ana@example.com", "Wrong1!x")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        svc.login("nobody@example.com", STRONG_PASSWORD)

    assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"
    assert wrong_password.value.status_code == unknown_email.value.status_code

from __future__ import annotations

import pytest

from devlink.core.errors import InvalidCredentialsError, ValidationError
from devlink.core.security import hash_password, verify_password
from devlink.services.profile_service import ProfileService

from conftest import STRONG_PASSWORD


@pytest.fixture()
def svc(repo) -> ProfileService:
    return ProfileService(repository=repo)


def test_edit_updates_only_given_fields(svc, make_user):
    user = make_user("Ana")
    updated = svc.edit(user, {"about": "Backend developer", "skills": ["python"]})

    assert updated.about == "Backend developer"
    assert updated.skills == ["python"]
    assert updated.first_name == "Ana"


def test_edit_refuses_non_profile_fields(svc, make_user):
    user = make_user("Ana")
    with pytest.raises(ValidationError):
        svc.edit(user, {"email": "new@example.com"})
    with pytest.raises(ValidationError):
        svc.edit(user, {"password_hash": "x"})


def test_change_password_requires_current_password(svc, repo, make_user):
    user = make_user("Ana", password_hash=hash_password(STRONG_PASSWORD))

    with pytest.raises(InvalidCredentialsError):
        svc.change_password(user, "Wrong1!x", "N3w!pass")

    svc.change_password(user, STRONG_PASSWORD, "N3w!pass")
    stored = repo.get_user(user.id)
    assert verify_password("N3w!pass", stored.password_hash)
    assert not verify_password(STRONG_PASSWORD, stored.password_hash)

"""Profile use cases: view, partial edit and password change."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from devlink.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from devlink.core.security import hash_password, verify_password
from devlink.db.models import User
from devlink.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"first_name", "last_name", "age", "gender", "photo_url", "about", "skills"})


@dataclass
class ProfileService:
    repository: SQLRepository = field(default_factory=SQLRepository)

    def view(self, user: User) -> User:
        return user

    def edit(self, user: User, changes: dict) -> User:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
        if not changes:
            return user
        updated = self.repository.update_user_profile(user.id, changes)
        if not updated:
            raise NotFoundError("User not found")
        logger.info("User %s updated profile fields %s", user.id, sorted(changes))
        return updated

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")
        self.repository.update_user_password(user.id, hash_password(new_password))
        logger.info("User %s changed password", user.id)

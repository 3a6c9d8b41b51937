"""Credential helpers (hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()

# Verified when the e-mail is unknown so both login failures cost the same.
_DUMMY_HASH = _ph.hash("devlink-dummy-password")


def hash_password(password: str) -> str:
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    """Check a plaintext password against a stored Argon2 hash."""
    stored = stored_hash or _DUMMY_HASH
    try:
        ok = _ph.verify(stored, password or "")
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False
    return ok and stored_hash is not None


def needs_rehash(stored_hash: str) -> bool:
    return _ph.check_needs_rehash(stored_hash)

#!/usr/bin/env python3
"""
Create an account directly in the database (seed/demo data).

Usage:
  python scripts/add_user.py --email ana@example.com --first Ana --last Lima [--password 'S3cret!x'] [--age 30]
"""
from __future__ import annotations

import argparse
import secrets
import string
import sys

from pydantic import ValidationError as SchemaError

from devlink.core.errors import AppError
from devlink.db import create_all
from devlink.repositories.sql_repository import SQLRepository
from devlink.schemas import SignupRequest
from devlink.services.auth_service import AuthService


def gen_password(length: int = 12) -> str:
    # Guarantee one of each class the signup rule asks for.
    pools = [string.ascii_lowercase, string.ascii_uppercase, string.digits, "@$!%*?&"]
    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(string.ascii_letters + string.digits) for _ in range(length - len(chars))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a devlink account")
    ap.add_argument("--email", required=True)
    ap.add_argument("--first", required=True, help="First name")
    ap.add_argument("--last", required=True, help="Last name")
    ap.add_argument("--password", help="Password (default: random)")
    ap.add_argument("--age", type=int)
    args = ap.parse_args()

    password = (args.password or "").strip() or gen_password()
    try:
        payload = SignupRequest(
            first_name=args.first,
            last_name=args.last,
            email=args.email,
            password=password,
            age=args.age,
        )
    except SchemaError as exc:
        raise SystemExit(f"Invalid input: {exc.errors()[0]['msg']}")

    create_all()
    service = AuthService(repository=SQLRepository())
    user = service.signup(payload.first_name, payload.last_name, str(payload.email), payload.password, age=payload.age)
    print("OK: user created")
    print(f"  id: {user.id}")
    print(f"  email: {user.email}")
    if not args.password:
        print(f"  password: {password}")


if __name__ == "__main__":
    try:
        main()
    except AppError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc.message}\n")
        raise SystemExit(1)

"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import selectinload

from devlink.db.models import ConnectionRequest, User
from devlink.db.session import get_session
from devlink.domain.relationships import ConnectionStatus, new_id, pair_key


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == (email or "").strip().lower())
            return session.execute(stmt).scalar_one_or_none()

    def create_user(
        self,
        email: str,
        password_hash: str,
        *,
        first_name: str,
        last_name: str,
        age: int | None = None,
        **profile,
    ) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            id=new_id(),
            email=email.strip().lower(),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            age=age,
            gender=profile.get("gender"),
            photo_url=profile.get("photo_url"),
            about=profile.get("about"),
            skills=list(profile.get("skills") or []),
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def update_user_profile(self, user_id: str, changes: dict) -> Optional[User]:
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(user)
            return user

    def update_user_password(self, user_id: str, password_hash: str) -> None:
        with get_session() as session:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(password_hash=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    # -------------------------- connection requests --------------------------
    def get_request(self, request_id: str) -> Optional[ConnectionRequest]:
        with get_session() as session:
            return session.get(ConnectionRequest, request_id)

    def find_request_by_pair(self, a: str, b: str) -> Optional[ConnectionRequest]:
        low, high = pair_key(a, b)
        with get_session() as session:
            stmt = select(ConnectionRequest).where(
                ConnectionRequest.user_low == low,
                ConnectionRequest.user_high == high,
            )
            return session.execute(stmt).scalar_one_or_none()

    def count_requests_for_pair(self, a: str, b: str) -> int:
        low, high = pair_key(a, b)
        with get_session() as session:
            stmt = select(func.count()).select_from(ConnectionRequest).where(
                ConnectionRequest.user_low == low,
                ConnectionRequest.user_high == high,
            )
            return int(session.execute(stmt).scalar_one())

    def insert_request(self, from_user_id: str, to_user_id: str, status: ConnectionStatus) -> ConnectionRequest:
        """Insert a new pair record; raises IntegrityError when the pair already exists."""
        now = datetime.now(timezone.utc)
        low, high = pair_key(from_user_id, to_user_id)
        entity = ConnectionRequest(
            id=new_id(),
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            user_low=low,
            user_high=high,
            status=status.value,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def set_request_status(
        self,
        request_id: str,
        status: ConnectionStatus,
        *,
        expected: Iterable[ConnectionStatus],
        to_user_id: str | None = None,
    ) -> Optional[ConnectionRequest]:
        """
        Compare-and-swap on the status column.

        The row is only updated when its current status is one of `expected`
        (and, if given, it is addressed to `to_user_id`). Returns the updated
        row, or None when nothing matched.
        """
        conditions = [
            ConnectionRequest.id == request_id,
            ConnectionRequest.status.in_([s.value for s in expected]),
        ]
        if to_user_id is not None:
            conditions.append(ConnectionRequest.to_user_id == to_user_id)
        with get_session() as session:
            stmt = (
                update(ConnectionRequest)
                .where(*conditions)
                .values(status=status.value, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            result = session.execute(stmt)
            session.commit()
            if result.rowcount != 1:
                return None
            return session.get(ConnectionRequest, request_id)

    def list_received(self, user_id: str, status: ConnectionStatus = ConnectionStatus.INTERESTED) -> list[ConnectionRequest]:
        with get_session() as session:
            stmt = (
                select(ConnectionRequest)
                .options(selectinload(ConnectionRequest.from_user))
                .where(ConnectionRequest.to_user_id == user_id, ConnectionRequest.status == status.value)
                .order_by(ConnectionRequest.updated_at.desc())
            )
            return session.execute(stmt).scalars().all()

    def list_accepted(self, user_id: str) -> list[ConnectionRequest]:
        with get_session() as session:
            stmt = (
                select(ConnectionRequest)
                .options(selectinload(ConnectionRequest.from_user), selectinload(ConnectionRequest.to_user))
                .where(
                    or_(ConnectionRequest.from_user_id == user_id, ConnectionRequest.to_user_id == user_id),
                    ConnectionRequest.status == ConnectionStatus.ACCEPTED.value,
                )
                .order_by(ConnectionRequest.updated_at.desc())
            )
            return session.execute(stmt).scalars().all()

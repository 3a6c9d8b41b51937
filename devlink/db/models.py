"""SQLAlchemy models for users and the connection-request ledger."""
from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    JSON,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    first_name = Column(String(64), nullable=False)
    last_name = Column(String(64), nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(String(16), nullable=True)
    photo_url = Column(Text, nullable=True)
    about = Column(Text, nullable=True)
    skills = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    sent_requests = relationship(
        "ConnectionRequest",
        foreign_keys="ConnectionRequest.from_user_id",
        back_populates="from_user",
        cascade="all,delete-orphan",
    )
    received_requests = relationship(
        "ConnectionRequest",
        foreign_keys="ConnectionRequest.to_user_id",
        back_populates="to_user",
        cascade="all,delete-orphan",
    )


class ConnectionRequest(Base):
    """One row per unordered user pair; (user_low, user_high) is the pair key."""

    __tablename__ = "connection_requests"
    __table_args__ = (
        UniqueConstraint("user_low", "user_high", name="uq_connection_requests_pair"),
        CheckConstraint("from_user_id <> to_user_id", name="ck_connection_requests_distinct"),
        CheckConstraint("user_low < user_high", name="ck_connection_requests_pair_order"),
        Index("ix_connection_requests_to_status", "to_user_id", "status"),
    )

    id = Column(String(32), primary_key=True)
    from_user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    to_user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_low = Column(String(32), nullable=False)
    user_high = Column(String(32), nullable=False)
    status = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    from_user = relationship("User", foreign_keys=[from_user_id], back_populates="sent_requests")
    to_user = relationship("User", foreign_keys=[to_user_id], back_populates="received_requests")

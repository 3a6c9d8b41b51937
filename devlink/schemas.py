"""
Pydantic schemas for request/response bodies.

Shape and format checks live here so the services only ever see well-typed
input. Field rules follow the web client's profile form.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{6,}$")
PASSWORD_RULE = "Password must include uppercase, lowercase, number, and special character, minimum 6 characters."
ALLOWED_GENDERS = {"male", "female", "other"}


class SendStatus(str, Enum):
    """Statuses a sender may set; ``ignore`` is kept for older clients."""

    interested = "interested"
    ignored = "ignored"
    ignore = "ignore"


class ReviewDecision(str, Enum):
    accepted = "accepted"
    rejected = "rejected"


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not 2 <= len(value) <= 20:
        raise ValueError("must be a string between 2 and 20 characters.")
    return value


def _check_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(PASSWORD_RULE)
    return value


# ============================================================
# Auth
# ============================================================

class SignupRequest(BaseModel):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: EmailStr
    password: str
    age: Optional[int] = Field(None, ge=10)

    model_config = ConfigDict(populate_by_name=True)

    validate_names = field_validator("first_name", "last_name")(_check_name)
    validate_password = field_validator("password")(_check_password)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


# ============================================================
# Profile
# ============================================================

class ProfileUpdate(BaseModel):
    """Partial profile edit; absent fields are left untouched."""

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    age: Optional[int] = Field(None, ge=10)
    gender: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    about: Optional[str] = None
    skills: Optional[List[str]] = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    validate_names = field_validator("first_name", "last_name")(_check_name)

    @field_validator("gender")
    @classmethod
    def normalize_gender(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().lower()
        if value not in ALLOWED_GENDERS:
            raise ValueError("Invalid gender value.")
        return value

    @field_validator("photo_url")
    @classmethod
    def check_photo_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not re.match(r"^https?://[^\s/$.?#][^\s]*$", value, re.IGNORECASE):
            raise ValueError("Photo URL must be a valid URL with http/https.")
        return value

    @field_validator("about")
    @classmethod
    def check_about(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not 9 <= len(value) <= 500:
            raise ValueError("About must be between 9 and 500 characters.")
        return value

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True, by_alias=False)
        return {key: value for key, value in data.items() if value is not None}


class PasswordChange(BaseModel):
    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)

    validate_password = field_validator("new_password")(_check_password)


# ============================================================
# Responses
# ============================================================

class UserOut(BaseModel):
    """Public view of a user; never includes the password hash."""

    id: str
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")
    email: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    photo_url: Optional[str] = Field(None, serialization_alias="photoUrl")
    about: Optional[str] = None
    skills: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PublicUserOut(UserOut):
    """Profile as seen by another user (no e-mail)."""

    email: Optional[str] = Field(None, exclude=True)


class ConnectionRequestOut(BaseModel):
    id: str
    from_user_id: str = Field(..., serialization_alias="fromUserId")
    to_user_id: str = Field(..., serialization_alias="toUserId")
    status: str
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ReceivedRequestOut(ConnectionRequestOut):
    from_user: PublicUserOut = Field(..., serialization_alias="fromUser")


def dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)

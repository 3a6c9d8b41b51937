"""
Error taxonomy shared by services and routers.

Every error carries the HTTP status and the message a caller is allowed to
see. Handlers in devlink.app translate them into JSON responses.
"""

from __future__ import annotations


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class RelationshipClosedError(ValidationError):
    default_message = "Connection request has already been reviewed"


class AccountExistsError(AppError):
    status_code = 400
    default_message = "User already exists"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class AuthorizationError(AppError):
    status_code = 404
    default_message = "No matching pending request found or you are not authorized."


class AuthError(AppError):
    """Missing, invalid or expired session."""

    status_code = 401
    kind = "invalid"
    default_message = "Please login"


class SessionMissingError(AuthError):
    kind = "missing"


class SessionInvalidError(AuthError):
    kind = "invalid"
    default_message = "Invalid session"


class SessionExpiredError(AuthError):
    kind = "expired"
    default_message = "Session expired"


class InvalidCredentialsError(AuthError):
    status_code = 400
    kind = "credentials"
    default_message = "Invalid credentials"


class RateLimitedError(AppError):
    status_code = 429
    default_message = "Too many requests. Try again shortly."


class InternalError(AppError):
    pass

"""FastAPI application factory and error translation."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from devlink import __version__
from devlink.core.config import get_settings
from devlink.core.errors import AppError, AuthError, InternalError
from devlink.core.logging import configure_logging
from devlink.routers import auth as auth_router
from devlink.routers import profile as profile_router
from devlink.routers import requests as requests_router
from devlink.routers import user as user_router

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _app_error(request: Request, exc: AppError) -> JSONResponse:
    body = {"message": exc.message}
    if isinstance(exc, AuthError):
        body["reason"] = exc.kind
    return JSONResponse(body, status_code=exc.status_code)


def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = str(first.get("msg") or "Invalid request")
    message = message.removeprefix("Value error, ")
    return JSONResponse({"message": f"{field}: {message}" if field else message}, status_code=400)


def _database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database failure on %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse({"message": error.message}, status_code=error.status_code)


def create_app() -> FastAPI:
    """Factory compatible with uvicorn --factory and the test client."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="devlink API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.client_urls),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_prod)

    app.add_exception_handler(AppError, _app_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(SQLAlchemyError, _database_error)

    @app.get("/")
    def index():
        return {
            "message": "devlink API is running",
            "status": "success",
            "endpoints": {
                "auth": ["/signup", "/login", "/logout"],
                "profile": "/profile/*",
                "requests": "/request/*",
                "users": "/user/*",
            },
        }

    @app.get("/health")
    def health():
        return {"ok": True, "version": __version__}

    app.include_router(auth_router.router)
    app.include_router(profile_router.router)
    app.include_router(requests_router.router)
    app.include_router(user_router.router)
    logger.info("devlink API configured (env=%s)", settings.app_env)
    return app

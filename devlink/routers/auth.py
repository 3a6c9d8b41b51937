from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from devlink.core.config import get_settings
from devlink.core.rate_limiter import rate_limit_ip
from devlink.db.models import User
from devlink.schemas import LoginRequest, SignupRequest, UserOut, dump
from devlink.services.auth_service import AuthService
from devlink.services.session_service import clear_session_cookie, require_user, set_session_cookie

router = APIRouter(tags=["auth"])


def get_auth_service() -> AuthService:
    return AuthService()


@router.post("/signup")
def signup(payload: SignupRequest, auth_service: AuthService = Depends(get_auth_service)):
    user = auth_service.signup(
        payload.first_name,
        payload.last_name,
        str(payload.email),
        payload.password,
        age=payload.age,
    )
    return {"message": "User signup successful", "data": dump(UserOut.model_validate(user))}


@router.post("/login")
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    settings = get_settings()
    rate_limit_ip(
        request,
        "auth:login",
        limit=settings.login_rate_limit,
        window_seconds=settings.login_rate_window_seconds,
    )
    outcome = auth_service.login(str(payload.email), payload.password)
    set_session_cookie(response, outcome.session_token)
    return {"data": dump(UserOut.model_validate(outcome.user)), "token": outcome.session_token}


@router.post("/logout")
def logout(
    response: Response,
    user: User = Depends(require_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    auth_service.logout(user)
    clear_session_cookie(response)
    return {"message": "Logout successful"}

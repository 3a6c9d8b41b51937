from __future__ import annotations

from fastapi import APIRouter, Depends

from devlink.db.models import User
from devlink.schemas import PasswordChange, ProfileUpdate, UserOut, dump
from devlink.services.profile_service import ProfileService
from devlink.services.session_service import require_user

router = APIRouter(prefix="/profile", tags=["profile"])


def get_profile_service() -> ProfileService:
    return ProfileService()


@router.get("/view")
def view_profile(user: User = Depends(require_user), profiles: ProfileService = Depends(get_profile_service)):
    return {"data": dump(UserOut.model_validate(profiles.view(user)))}


@router.patch("/edit")
def edit_profile(
    payload: ProfileUpdate,
    user: User = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    updated = profiles.edit(user, payload.changes())
    return {
        "message": f"{updated.first_name}, your profile was updated successfully",
        "data": dump(UserOut.model_validate(updated)),
    }


@router.patch("/password")
def change_password(
    payload: PasswordChange,
    user: User = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    profiles.change_password(user, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully"}

"""Profile routes."""

from fastapi import APIRouter, Depends

from ...models.user import User
from ...services.auth import UserService
from ..deps import get_current_user, get_user_service
from ..schemas import ProfileUpdateRequest

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile")
async def get_profile(
    user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    profile = await users.get_profile(user.id)
    return {"status": "success", "data": {"user": profile.to_dict()}}


@router.api_route("/profile", methods=["PUT", "POST"])
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """Partial update; omitted fields keep their values."""
    profile = await users.update_profile(
        user.id, body.model_dump(by_alias=True, exclude_none=True)
    )
    return {"status": "success", "data": {"user": profile.to_dict()}}

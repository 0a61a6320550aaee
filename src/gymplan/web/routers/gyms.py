"""Gym lookup routes."""

from fastapi import APIRouter, Depends, Query

from ...models.user import User
from ...services.gyms import DEFAULT_RADIUS_M, GymService
from ..deps import get_current_user, get_gym_service
from ..schemas import SelectGymRequest

router = APIRouter(
    prefix="/api/gyms", tags=["gyms"], dependencies=[Depends(get_current_user)]
)


@router.get("/nearby")
async def nearby_gyms(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(DEFAULT_RADIUS_M, ge=0),
    gyms: GymService = Depends(get_gym_service),
):
    """Gyms within `radius` meters, nearest first."""
    found = await gyms.nearby(lat, lng, radius)
    return {"status": "success", "data": {"gyms": [gym.to_dict() for gym in found]}}


@router.post("/select")
async def select_gym(
    body: SelectGymRequest,
    user: User = Depends(get_current_user),
    gyms: GymService = Depends(get_gym_service),
):
    updated = await gyms.select(user, body.gym_id)
    return {"status": "success", "data": {"user": updated.to_dict()}}


@router.get("/{gym_id}")
async def get_gym(gym_id: str, gyms: GymService = Depends(get_gym_service)):
    gym = await gyms.get(gym_id)
    return {"status": "success", "data": {"gym": gym.to_dict()}}

"""Gym lookup by proximity."""

import logging
from pathlib import Path

from ..db.repositories import GymRepository, UserRepository
from ..errors import NotFoundError
from ..models.gym import Gym
from ..models.user import User
from .geo import haversine_distance

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 5000.0


class GymService:
    def __init__(self, db_path: Path):
        self.gym_repo = GymRepository(db_path)
        self.user_repo = UserRepository(db_path)

    async def nearby(
        self, lat: float, lng: float, radius: float = DEFAULT_RADIUS_M
    ) -> list[Gym]:
        """Gyms within `radius` meters, nearest first.

        Scans every gym; there is no spatial index.
        """
        nearby = []
        for gym in await self.gym_repo.list_all():
            gym.distance = haversine_distance(lat, lng, gym.latitude, gym.longitude)
            if gym.distance <= radius:
                nearby.append(gym)
        nearby.sort(key=lambda g: g.distance)
        logger.debug("%d gym(s) within %sm of (%s, %s)", len(nearby), radius, lat, lng)
        return nearby

    async def get(self, gym_id: str) -> Gym:
        gym = await self.gym_repo.get(gym_id, with_equipment=True)
        if gym is None:
            raise NotFoundError("Gym not found")
        return gym

    async def select(self, user: User, gym_id: str) -> User:
        """Make `gym_id` the user's selected gym."""
        await self.get(gym_id)
        user.selected_gym_id = gym_id
        await self.user_repo.update(user)
        return user

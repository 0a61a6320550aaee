"""Gym location model."""

from dataclasses import dataclass, field

from .equipment import UserEquipment


@dataclass
class Gym:
    """A physical gym where shared equipment lives."""

    name: str
    address: str
    latitude: float
    longitude: float
    id: str | None = None
    user_equipment: list[UserEquipment] = field(default_factory=list)
    distance: float | None = None  # meters from a lookup point, when known

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.distance is not None:
            data["distance"] = self.distance
        if self.user_equipment:
            data["userEquipment"] = [link.to_dict() for link in self.user_equipment]
        return data


SEED_GYMS: list[Gym] = [
    Gym(
        name="Gold's Gym Venice",
        address="360 Hampton Dr, Venice, CA",
        latitude=33.99,
        longitude=-118.47,
    ),
    Gym(
        name="Planet Fitness",
        address="123 Main St",
        latitude=34.05,
        longitude=-118.25,
    ),
]

"""Equipment catalog and inventory models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EquipmentCategory(str, Enum):
    """Equipment categories."""

    FREE_WEIGHTS = "free_weights"
    MACHINES = "machines"
    CABLE = "cable"
    CARDIO = "cardio"
    BODYWEIGHT = "bodyweight"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "EquipmentCategory":
        """Parse a category, mapping unknown values to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass
class Equipment:
    """A piece of equipment in the shared catalog."""

    name: str
    category: EquipmentCategory
    id: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
        }


@dataclass
class UserEquipment:
    """Links a user to equipment they can access, optionally at a gym."""

    user_id: str
    equipment_id: str
    gym_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    equipment: Equipment | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "equipmentId": self.equipment_id,
            "gymId": self.gym_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if self.equipment is not None:
            data["equipment"] = self.equipment.to_dict()
        return data


@dataclass
class DetectedEquipment:
    """An equipment item recognized in a scanned image.

    Not persisted: the user confirms detected items before they are
    added to the catalog.
    """

    id: str
    name: str
    category: str
    confidence: float
    icon: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "confidence": self.confidence,
            "icon": self.icon,
        }


# Display icon per category
CATEGORY_ICONS: dict[str, str] = {
    EquipmentCategory.FREE_WEIGHTS.value: "🏋️",
    EquipmentCategory.MACHINES.value: "⚙️",
    EquipmentCategory.CARDIO.value: "🏃",
    EquipmentCategory.CABLE.value: "🔗",
    EquipmentCategory.BODYWEIGHT.value: "💪",
}
DEFAULT_ICON = "🏋️"


def icon_for_category(category: str) -> str:
    """Get the display icon for a category."""
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)


# Catalog seeded by `gymplan init`
SEED_EQUIPMENT: list[Equipment] = [
    Equipment(name="Barbell", category=EquipmentCategory.FREE_WEIGHTS),
    Equipment(name="Dumbbells", category=EquipmentCategory.FREE_WEIGHTS),
    Equipment(name="Kettlebells", category=EquipmentCategory.FREE_WEIGHTS),
    Equipment(name="EZ Bar", category=EquipmentCategory.FREE_WEIGHTS),
    Equipment(name="Bench Press", category=EquipmentCategory.FREE_WEIGHTS),
    Equipment(name="Squat Rack", category=EquipmentCategory.FREE_WEIGHTS),
    Equipment(name="Cable Machine", category=EquipmentCategory.CABLE),
    Equipment(name="Leg Press", category=EquipmentCategory.MACHINES),
    Equipment(name="Leg Extension", category=EquipmentCategory.MACHINES),
    Equipment(name="Leg Curl", category=EquipmentCategory.MACHINES),
    Equipment(name="Lat Pulldown", category=EquipmentCategory.MACHINES),
    Equipment(name="Chest Press Machine", category=EquipmentCategory.MACHINES),
    Equipment(name="Treadmill", category=EquipmentCategory.CARDIO),
    Equipment(name="Rowing Machine", category=EquipmentCategory.CARDIO),
    Equipment(name="Pull-up Bar", category=EquipmentCategory.BODYWEIGHT),
    Equipment(name="Dip Station", category=EquipmentCategory.BODYWEIGHT),
    Equipment(name="Medicine Ball", category=EquipmentCategory.OTHER),
]

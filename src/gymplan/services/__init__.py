"""Business logic services."""

from .equipment import EquipmentService
from .equipment_scan import EquipmentScanner, normalize_equipment_response
from .geo import haversine_distance
from .gyms import GymService
from .plan_generator import PlanGenerator, filter_available_exercises
from .progress import ProgressEntry, ProgressTracker
from .splits import get_split_days
from .volume import get_volume

__all__ = [
    "EquipmentScanner",
    "EquipmentService",
    "filter_available_exercises",
    "get_split_days",
    "get_volume",
    "GymService",
    "haversine_distance",
    "normalize_equipment_response",
    "PlanGenerator",
    "ProgressEntry",
    "ProgressTracker",
]

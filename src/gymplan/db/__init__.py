"""Database layer for gymplan."""

from .engine import get_db_path, init_db, seed_catalog, transaction
from .repositories import (
    EquipmentRepository,
    ExerciseRepository,
    GymRepository,
    UserEquipmentRepository,
    UserRepository,
    WorkoutPlanRepository,
    WorkoutProgressRepository,
)

__all__ = [
    "EquipmentRepository",
    "ExerciseRepository",
    "get_db_path",
    "GymRepository",
    "init_db",
    "seed_catalog",
    "transaction",
    "UserEquipmentRepository",
    "UserRepository",
    "WorkoutPlanRepository",
    "WorkoutProgressRepository",
]

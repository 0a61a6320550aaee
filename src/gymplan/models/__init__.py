"""Data models for gymplan."""

from .equipment import DetectedEquipment, Equipment, EquipmentCategory, UserEquipment
from .exercises import Exercise, ExerciseEquipment
from .gym import Gym
from .plan import PlanDay, PlanExercise, SplitType, WorkoutPlan
from .progress import WorkoutProgress
from .user import ExperienceLevel, FitnessGoal, User

__all__ = [
    "DetectedEquipment",
    "Equipment",
    "EquipmentCategory",
    "Exercise",
    "ExerciseEquipment",
    "ExperienceLevel",
    "FitnessGoal",
    "Gym",
    "PlanDay",
    "PlanExercise",
    "SplitType",
    "User",
    "UserEquipment",
    "WorkoutPlan",
    "WorkoutProgress",
]

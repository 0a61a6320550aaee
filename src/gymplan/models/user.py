"""User account and fitness profile model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ExperienceLevel(str, Enum):
    """Training experience level."""

    BEGINNER = "beginner"  # < 1 year consistent training
    INTERMEDIATE = "intermediate"  # 1-3 years
    ADVANCED = "advanced"  # 3+ years


class FitnessGoal(str, Enum):
    """Primary fitness goals."""

    MUSCLE_GAIN = "muscle_gain"
    FAT_LOSS = "fat_loss"
    STRENGTH = "strength"


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


# Profile fields a user may update, keyed by their API name
PROFILE_FIELDS = {
    "age": "age",
    "height": "height",
    "weight": "weight",
    "unit": "unit",
    "experienceLevel": "experience_level",
    "fitnessGoal": "fitness_goal",
    "workoutDaysPerWeek": "workout_days_per_week",
    "sessionDuration": "session_duration",
}


@dataclass
class User:
    """A registered user and their fitness profile."""

    email: str
    password_hash: str
    name: str | None = None
    age: int | None = None
    height: float | None = None
    weight: float | None = None
    unit: str = UnitSystem.METRIC.value
    experience_level: str | None = None
    fitness_goal: str | None = None
    workout_days_per_week: int | None = None
    session_duration: int | None = None
    selected_gym_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def apply_profile(self, data: dict) -> None:
        """Apply a partial profile update given in API field names."""
        for api_name, attr in PROFILE_FIELDS.items():
            if api_name in data and data[api_name] is not None:
                value = data[api_name]
                if isinstance(value, Enum):
                    value = value.value
                setattr(self, attr, value)

    def to_dict(self) -> dict:
        """Public representation; the password hash is never included."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "age": self.age,
            "height": self.height,
            "weight": self.weight,
            "unit": self.unit,
            "experienceLevel": self.experience_level,
            "fitnessGoal": self.fitness_goal,
            "workoutDaysPerWeek": self.workout_days_per_week,
            "sessionDuration": self.session_duration,
            "selectedGymId": self.selected_gym_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

"""Request bodies accepted by the API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ..models.plan import SplitType
from ..models.user import ExperienceLevel, FitnessGoal, UnitSystem


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_Body):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8)
    name: str | None = None
    age: int | None = Field(default=None, ge=0, le=130)


class LoginRequest(_Body):
    email: str
    password: str


class ProfileUpdateRequest(_Body):
    age: int | None = None
    height: float | None = None
    weight: float | None = None
    unit: UnitSystem | None = None
    experience_level: ExperienceLevel | None = Field(default=None, alias="experienceLevel")
    fitness_goal: FitnessGoal | None = Field(default=None, alias="fitnessGoal")
    workout_days_per_week: int | None = Field(
        default=None, ge=1, le=7, alias="workoutDaysPerWeek"
    )
    session_duration: int | None = Field(default=None, alias="sessionDuration")


class AddEquipmentRequest(_Body):
    equipment_ids: list[str] = Field(alias="equipmentIds")
    gym_id: str | None = Field(default=None, alias="gymId")


class ConfirmedItem(_Body):
    name: str = Field(min_length=1)
    category: str | None = None


class ConfirmEquipmentRequest(_Body):
    items: list[ConfirmedItem]


class SelectGymRequest(_Body):
    gym_id: str = Field(alias="gymId")


class GeneratePlanRequest(_Body):
    split_type: SplitType = Field(alias="splitType")
    equipment_ids: list[str] = Field(alias="equipmentIds")
    use_ai: bool = Field(default=False, alias="useAi")


class ProgressRequest(_Body):
    exercise_id: str = Field(alias="exerciseId")
    workout_date: date = Field(alias="date")
    completed: bool = True
    plan_id: str | None = Field(default=None, alias="planId")
    day_index: int | None = Field(default=None, alias="dayIndex")
    week_number: int | None = Field(default=None, alias="weekNumber")

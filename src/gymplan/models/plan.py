"""Weekly workout plan models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .exercises import Exercise


class SplitType(str, Enum):
    """Weekly training splits accepted by plan generation."""

    PPL = "ppl"  # Push / Pull / Legs
    UPPER_LOWER = "upper_lower"
    FULL_BODY = "full_body"
    BRO_SPLIT = "bro_split"  # One muscle group per day


@dataclass
class PlanExercise:
    """An exercise slot within a plan day."""

    exercise_id: str
    order_index: int
    sets: int
    reps: str  # "5" or a range like "8-12"
    notes: str = ""
    plan_day_id: str | None = None
    id: str | None = None
    exercise: Exercise | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "planDayId": self.plan_day_id,
            "exerciseId": self.exercise_id,
            "orderIndex": self.order_index,
            "sets": self.sets,
            "reps": self.reps,
            "notes": self.notes,
        }
        if self.exercise is not None:
            data["exercise"] = self.exercise.to_dict()
        return data


@dataclass
class PlanDay:
    """A single day of the weekly plan."""

    day_number: int  # 1-based
    day_name: str
    focus: str  # comma-separated muscle groups, "Rest" on rest days
    is_rest_day: bool = False
    exercises: list[PlanExercise] = field(default_factory=list)
    plan_id: str | None = None
    id: str | None = None

    @property
    def muscle_groups(self) -> list[str]:
        """Focus split into trimmed, non-empty muscle group tokens."""
        if not self.focus:
            return []
        return [part.strip() for part in self.focus.split(",") if part.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "planId": self.plan_id,
            "dayNumber": self.day_number,
            "dayName": self.day_name,
            "focus": self.focus,
            "isRestDay": self.is_rest_day,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


@dataclass
class WorkoutPlan:
    """A user's weekly plan."""

    user_id: str
    split_type: str
    days: list[PlanDay] = field(default_factory=list)
    is_active: bool = True
    id: str | None = None
    created_at: datetime | None = None

    @property
    def training_days(self) -> list[PlanDay]:
        return [day for day in self.days if not day.is_rest_day]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "splitType": self.split_type,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "days": [day.to_dict() for day in self.days],
        }

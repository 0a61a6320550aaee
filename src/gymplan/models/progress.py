"""Workout progress tracking model."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class WorkoutProgress:
    """Completion record for one exercise on one date.

    Unique per (user, exercise, workout date).
    """

    user_id: str
    exercise_id: str
    workout_date: date
    completed: bool = False
    completed_at: datetime | None = None
    plan_id: str | None = None
    day_index: int | None = None
    week_number: int | None = None
    id: str | None = None

    def mark(self, completed: bool) -> None:
        """Set completion, stamping the time when completed."""
        self.completed = completed
        self.completed_at = datetime.now() if completed else None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "planId": self.plan_id,
            "exerciseId": self.exercise_id,
            "workoutDate": self.workout_date.isoformat(),
            "dayIndex": self.day_index,
            "weekNumber": self.week_number,
            "completed": self.completed,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }

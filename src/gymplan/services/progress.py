"""Per-date exercise completion tracking."""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from ..db.engine import transaction
from ..db.repositories import (
    ExerciseRepository,
    WorkoutPlanRepository,
    WorkoutProgressRepository,
)
from ..errors import NotFoundError, ValidationError
from ..models.progress import WorkoutProgress

logger = logging.getLogger(__name__)


@dataclass
class ProgressEntry:
    """A request to mark one exercise done (or undone) on a date."""

    exercise_id: str
    workout_date: date
    completed: bool = True
    plan_id: str | None = None
    day_index: int | None = None
    week_number: int | None = None


class ProgressTracker:
    """Records and queries workout completion."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.progress_repo = WorkoutProgressRepository(db_path)
        self.exercise_repo = ExerciseRepository(db_path)
        self.plan_repo = WorkoutPlanRepository(db_path)

    async def mark_exercise_complete(
        self, user_id: str, entry: ProgressEntry
    ) -> WorkoutProgress:
        """Upsert the record for (user, exercise, date).

        An existing record only has its completion updated.

        Raises:
            NotFoundError: the exercise, or the given plan of this user,
                does not exist
        """
        if entry.plan_id is not None:
            plan = await self.plan_repo.get(entry.plan_id)
            if plan is None or plan.user_id != user_id:
                raise NotFoundError("Workout plan not found")

        async with transaction(self.db_path) as db:
            if await self.exercise_repo.get(entry.exercise_id, db=db) is None:
                raise NotFoundError("Exercise not found")
            progress = WorkoutProgress(
                user_id=user_id,
                exercise_id=entry.exercise_id,
                workout_date=entry.workout_date,
                plan_id=entry.plan_id,
                day_index=entry.day_index,
                week_number=entry.week_number,
            )
            progress.mark(entry.completed)
            progress = await self.progress_repo.upsert(progress, db=db)

        logger.debug(
            "User %s exercise %s on %s completed=%s",
            user_id,
            entry.exercise_id,
            entry.workout_date,
            entry.completed,
        )
        return progress

    async def weekly_progress(
        self, user_id: str, start: date, end: date
    ) -> list[WorkoutProgress]:
        """Records dated within [start, end]."""
        if end < start:
            raise ValidationError("End date must not be before start date")
        return await self.progress_repo.list_between(user_id, start, end)

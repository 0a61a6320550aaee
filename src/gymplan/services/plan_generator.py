"""Weekly workout plan generation."""

import logging
import random
from pathlib import Path

from ..clients.ai import AIClient
from ..db.engine import new_id, transaction
from ..db.repositories import ExerciseRepository, UserRepository, WorkoutPlanRepository
from ..errors import NotFoundError
from ..models.exercises import Difficulty, Exercise, ExerciseCategory
from ..models.plan import PlanDay, PlanExercise, WorkoutPlan
from ..models.user import User
from .equipment_scan import parse_json_text
from .plan_payload import (
    PLAN_RESPONSE_SCHEMA,
    PayloadDay,
    Strictness,
    validate_plan_payload,
)
from .prompts import build_plan_prompt
from .splits import get_split_days, is_known_split
from .volume import get_volume

logger = logging.getLogger(__name__)

EXERCISES_PER_GROUP = 3


def filter_available_exercises(
    exercises: list[Exercise], equipment_ids: set[str]
) -> list[Exercise]:
    """Exercises whose primary equipment is all in `equipment_ids`.

    Exercises without primary equipment (bodyweight) always qualify;
    partial coverage disqualifies.
    """
    return [ex for ex in exercises if ex.is_available_with(equipment_ids)]


class PlanGenerator:
    """Builds and stores a user's weekly plan.

    Exercise sampling draws from `rng`; pass a seeded `random.Random`
    for reproducible plans.
    """

    def __init__(
        self,
        db_path: Path,
        ai_client: AIClient | None = None,
        rng: random.Random | None = None,
        ai_plans_enabled: bool = False,
    ):
        self.db_path = db_path
        self.ai_client = ai_client
        self.rng = rng or random.Random()
        self.ai_plans_enabled = ai_plans_enabled
        self.user_repo = UserRepository(db_path)
        self.exercise_repo = ExerciseRepository(db_path)
        self.plan_repo = WorkoutPlanRepository(db_path)

    async def generate(
        self, user_id: str, split_type: str, equipment_ids: list[str]
    ) -> WorkoutPlan:
        """Generate a plan from the local exercise catalog.

        Raises:
            NotFoundError: the user does not exist
        """
        user = await self._get_user(user_id)
        pool = filter_available_exercises(
            await self.exercise_repo.list_all(), set(equipment_ids)
        )
        self._check_split(split_type)
        logger.info(
            "Generating %s plan for user %s from %d available exercises",
            split_type,
            user_id,
            len(pool),
        )

        volume = get_volume(user.fitness_goal)
        days = []
        for template in get_split_days(split_type):
            day = template.to_plan_day()
            if not day.is_rest_day:
                day.exercises = [
                    PlanExercise(
                        exercise_id=exercise.id,
                        order_index=index,
                        sets=volume.sets,
                        reps=volume.reps,
                        exercise=exercise,
                    )
                    for index, exercise in enumerate(self.select_exercises(day, pool))
                ]
            days.append(day)

        return await self._save(WorkoutPlan(user_id=user.id, split_type=split_type, days=days))

    def select_exercises(self, day: PlanDay, pool: list[Exercise]) -> list[Exercise]:
        """Up to three random exercises per muscle group, in focus order."""
        selected: list[Exercise] = []
        for group in day.muscle_groups:
            candidates = [ex for ex in pool if ex.targets(group)]
            selected.extend(
                self.rng.sample(candidates, min(EXERCISES_PER_GROUP, len(candidates)))
            )
        return selected

    async def generate_with_ai(
        self, user_id: str, split_type: str, equipment_ids: list[str]
    ) -> WorkoutPlan:
        """Generate a plan with the AI service choosing the exercises.

        Falls back to the bodyweight template plan when the AI is not
        configured or disabled, the call fails, or the answer is not JSON.

        Raises:
            NotFoundError: the user does not exist
            InvalidUpstreamResponse: the answer is JSON without a `days` list
        """
        user = await self._get_user(user_id)
        catalog = await self.exercise_repo.list_all()
        self._check_split(split_type)

        payload_days = None
        if self.ai_client is None or not self.ai_plans_enabled:
            logger.info("AI plan generation disabled; using template plan")
        else:
            payload_days = await self._request_ai_days(
                user, split_type, filter_available_exercises(catalog, set(equipment_ids))
            )
        if payload_days is None:
            payload_days = self.build_fallback_days(split_type, user.fitness_goal, catalog)

        days, new_exercises = self._resolve_days(payload_days, catalog)
        plan = WorkoutPlan(user_id=user.id, split_type=split_type, days=days)
        return await self._save(plan, new_exercises)

    async def _request_ai_days(
        self, user: User, split_type: str, pool: list[Exercise]
    ) -> list[PayloadDay] | None:
        prompt = build_plan_prompt(split_type, user.fitness_goal, user.experience_level, pool)
        try:
            text = await self.ai_client.complete_json(prompt, schema=PLAN_RESPONSE_SCHEMA)
        except Exception:
            logger.exception("AI plan request failed; using template plan")
            return None

        parsed = parse_json_text(text)
        if parsed is None:
            logger.warning("AI plan answer is not JSON; using template plan")
            return None
        return validate_plan_payload(parsed, Strictness.STRICT)

    def build_fallback_days(
        self, split_type: str, goal: str | None, catalog: list[Exercise]
    ) -> list[PayloadDay]:
        """Deterministic plan from the split template and bodyweight exercises."""
        bodyweight = [ex for ex in catalog if ex.is_bodyweight]
        volume = get_volume(goal)

        days = []
        for template in get_split_days(split_type):
            exercises = []
            if not template.is_rest_day:
                for group in template.to_plan_day().muscle_groups:
                    matches = [ex for ex in bodyweight if ex.targets(group)]
                    exercises.extend(
                        {
                            "name": ex.name,
                            "muscleGroup": ex.muscle_group,
                            "sets": volume.sets,
                            "reps": volume.reps,
                        }
                        for ex in matches[:EXERCISES_PER_GROUP]
                    )
            days.append(
                {
                    "dayNumber": template.day_number,
                    "dayName": template.day_name,
                    "focus": template.focus,
                    "isRestDay": template.is_rest_day,
                    "exercises": exercises,
                }
            )
        return validate_plan_payload({"days": days}, Strictness.LENIENT)

    def _resolve_days(
        self, payload_days: list[PayloadDay], catalog: list[Exercise]
    ) -> tuple[list[PlanDay], list[Exercise]]:
        """Map payload exercise names onto catalog exercises.

        Names missing from the catalog become new exercises, returned
        separately so they are stored with the plan.
        """
        by_name = {ex.name.lower(): ex for ex in catalog}
        new_exercises: list[Exercise] = []

        days = []
        for payload_day in payload_days:
            day = PlanDay(
                day_number=payload_day.day_number,
                day_name=payload_day.day_name,
                focus=payload_day.focus,
                is_rest_day=payload_day.is_rest_day,
            )
            for index, item in enumerate(payload_day.exercises):
                exercise = by_name.get(item.name.lower())
                if exercise is None:
                    exercise = Exercise(
                        id=new_id(),
                        name=item.name,
                        muscle_group=item.muscle_group or payload_day.focus,
                        category=ExerciseCategory.AI_GENERATED.value,
                        difficulty=Difficulty.INTERMEDIATE.value,
                    )
                    by_name[item.name.lower()] = exercise
                    new_exercises.append(exercise)
                day.exercises.append(
                    PlanExercise(
                        exercise_id=exercise.id,
                        order_index=index,
                        sets=item.sets,
                        reps=item.reps,
                        notes=item.notes,
                        exercise=exercise,
                    )
                )
            days.append(day)
        return days, new_exercises

    async def _save(
        self, plan: WorkoutPlan, new_exercises: list[Exercise] | None = None
    ) -> WorkoutPlan:
        """Store the plan atomically and return it fully hydrated.

        The user's previous plans are deactivated in the same transaction.
        """
        async with transaction(self.db_path) as db:
            for exercise in new_exercises or []:
                await self.exercise_repo.add(exercise, db=db)
            await self.plan_repo.deactivate_for_user(plan.user_id, db=db)
            await self.plan_repo.create(plan, db=db)

        logger.info(
            "Saved plan %s with %d training day(s)", plan.id, len(plan.training_days)
        )
        return await self.plan_repo.get(plan.id)

    async def get_current_plan(self, user_id: str) -> WorkoutPlan | None:
        return await self.plan_repo.get_active(user_id)

    async def _get_user(self, user_id: str) -> User:
        user = await self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _check_split(split_type: str) -> None:
        if not is_known_split(split_type):
            logger.warning(
                "Unknown split type %r; falling back to full body", split_type
            )

"""Workout plan and progress routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from ...errors import ValidationError
from ...models.user import User
from ...services.plan_generator import PlanGenerator
from ...services.progress import ProgressEntry, ProgressTracker
from ..deps import get_current_user, get_plan_generator, get_progress_tracker
from ..schemas import GeneratePlanRequest, ProgressRequest

router = APIRouter(prefix="/api/workout-plans", tags=["workout-plans"])


@router.post("/generate", status_code=201)
async def generate_plan(
    body: GeneratePlanRequest,
    user: User = Depends(get_current_user),
    generator: PlanGenerator = Depends(get_plan_generator),
):
    """Generate and activate a new weekly plan."""
    split_type = body.split_type.value
    if body.use_ai:
        plan = await generator.generate_with_ai(user.id, split_type, body.equipment_ids)
    else:
        plan = await generator.generate(user.id, split_type, body.equipment_ids)
    return {"status": "success", "data": {"plan": plan.to_dict()}}


@router.get("/current")
async def current_plan(
    user: User = Depends(get_current_user),
    generator: PlanGenerator = Depends(get_plan_generator),
):
    plan = await generator.get_current_plan(user.id)
    return {"status": "success", "data": {"plan": plan.to_dict() if plan else None}}


@router.post("/progress")
async def mark_progress(
    body: ProgressRequest,
    user: User = Depends(get_current_user),
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    progress = await tracker.mark_exercise_complete(
        user.id,
        ProgressEntry(
            exercise_id=body.exercise_id,
            workout_date=body.workout_date,
            completed=body.completed,
            plan_id=body.plan_id,
            day_index=body.day_index,
            week_number=body.week_number,
        ),
    )
    return {"status": "success", "data": {"progress": progress.to_dict()}}


@router.get("/progress/weekly")
async def weekly_progress(
    start: date | None = Query(None),
    end: date | None = Query(None),
    user: User = Depends(get_current_user),
    tracker: ProgressTracker = Depends(get_progress_tracker),
):
    """Progress records dated within [start, end]."""
    if start is None or end is None:
        raise ValidationError("Please provide start and end dates")
    records = await tracker.weekly_progress(user.id, start, end)
    return {"status": "success", "data": {"progress": [r.to_dict() for r in records]}}

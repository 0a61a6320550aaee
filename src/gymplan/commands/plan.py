"""Workout plan commands."""

import random

import click

from ..db import EquipmentRepository, UserRepository
from ..errors import AppError
from ..models.plan import SplitType, WorkoutPlan
from ..models.user import User
from ..services.plan_generator import PlanGenerator
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    get_settings,
)


@click.group()
@click.pass_context
def plan(ctx):
    """Generate and view workout plans."""
    ensure_initialized(ctx)


async def _find_user(ctx: click.Context, email: str) -> User:
    found = await UserRepository(get_settings(ctx).db_path).get_by_email(email)
    if found is None:
        echo_error(f"No user with email {email}")
        ctx.exit(1)
    return found


def _print_plan(workout_plan: WorkoutPlan) -> None:
    click.echo()
    click.echo("=" * 60)
    click.echo(f"{workout_plan.split_type} plan (ID: {workout_plan.id})")
    click.echo("=" * 60)
    for day in workout_plan.days:
        click.echo()
        if day.is_rest_day:
            click.echo(f"Day {day.day_number}: {day.day_name} (rest)")
            continue
        click.echo(f"Day {day.day_number}: {day.day_name} - {day.focus}")
        if not day.exercises:
            click.echo("  (no exercises available with this equipment)")
        for item in day.exercises:
            name = item.exercise.name if item.exercise else item.exercise_id
            click.echo(f"  {item.order_index + 1}. {name}  {item.sets} x {item.reps}")


@plan.command()
@click.argument("email")
@click.option(
    "--split", "-s",
    type=click.Choice([s.value for s in SplitType]),
    default=SplitType.PPL.value,
    show_default=True,
)
@click.option("--equipment", "-e", "equipment_names", multiple=True,
              help="Equipment name (repeatable)")
@click.option("--seed", type=int, default=None, help="Seed for reproducible selection")
@click.option("--ai", "use_ai", is_flag=True, help="Let the AI service choose exercises")
@click.pass_context
@async_command
async def generate(ctx, email: str, split: str, equipment_names: tuple[str, ...],
                   seed: int | None, use_ai: bool):
    """Generate a new active plan for the user with EMAIL."""
    settings = get_settings(ctx)
    account = await _find_user(ctx, email)

    equipment_repo = EquipmentRepository(settings.db_path)
    equipment_ids = []
    for name in equipment_names:
        item = await equipment_repo.get_by_name(name)
        if item is None:
            echo_error(f"Unknown equipment: {name}")
            ctx.exit(1)
        equipment_ids.append(item.id)

    ai_client = None
    if use_ai:
        from ..clients.ai import create_ai_client

        ai_client = create_ai_client(
            settings.openai_api_key, settings.ai_model, settings.ai_timeout
        )

    generator = PlanGenerator(
        settings.db_path,
        ai_client=ai_client,
        rng=random.Random(seed),
        ai_plans_enabled=settings.ai_plans_enabled,
    )
    try:
        if use_ai:
            new_plan = await generator.generate_with_ai(account.id, split, equipment_ids)
        else:
            new_plan = await generator.generate(account.id, split, equipment_ids)
    except AppError as e:
        echo_error(e.message)
        ctx.exit(1)
    finally:
        if ai_client is not None:
            await ai_client.close()

    _print_plan(new_plan)
    click.echo()
    echo_success("Plan saved and activated")


@plan.command()
@click.argument("email")
@click.pass_context
@async_command
async def show(ctx, email: str):
    """Show the active plan of the user with EMAIL."""
    account = await _find_user(ctx, email)
    current = await PlanGenerator(get_settings(ctx).db_path).get_current_plan(account.id)
    if current is None:
        echo_info("No active plan. Generate one with 'gymplan plan generate'")
        return
    _print_plan(current)

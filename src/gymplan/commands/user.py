"""User account commands."""

import click
import questionary

from ..errors import AppError
from ..models.user import ExperienceLevel, FitnessGoal
from ..services.auth import AuthService, UserService
from .base import async_command, echo_error, echo_success, ensure_initialized, get_settings


@click.group()
@click.pass_context
def user(ctx):
    """Manage user accounts."""
    ensure_initialized(ctx)


@user.command()
@click.pass_context
@async_command
async def create(ctx):
    """Create a user through an interactive questionnaire."""
    db_path = get_settings(ctx).db_path

    email = await questionary.text(
        "Email:", validate=lambda text: "@" in text or "Enter an email address"
    ).ask_async()
    password = await questionary.password(
        "Password:", validate=lambda text: len(text) >= 8 or "Use at least 8 characters"
    ).ask_async()
    name = await questionary.text("Name (optional):").ask_async()
    experience = await questionary.select(
        "Training experience?",
        choices=[
            questionary.Choice("Beginner (less than 1 year)", ExperienceLevel.BEGINNER.value),
            questionary.Choice("Intermediate (1-3 years)", ExperienceLevel.INTERMEDIATE.value),
            questionary.Choice("Advanced (3+ years)", ExperienceLevel.ADVANCED.value),
        ],
    ).ask_async()
    goal = await questionary.select(
        "Primary goal?",
        choices=[
            questionary.Choice("Build muscle", FitnessGoal.MUSCLE_GAIN.value),
            questionary.Choice("Lose fat", FitnessGoal.FAT_LOSS.value),
            questionary.Choice("Get stronger", FitnessGoal.STRENGTH.value),
        ],
    ).ask_async()

    # ask_async returns None when the prompt is cancelled
    if email is None or password is None:
        echo_error("Cancelled")
        ctx.exit(1)

    try:
        account = await AuthService(db_path).create_account(email, password, name or None)
    except AppError as e:
        echo_error(e.message)
        ctx.exit(1)

    await UserService(db_path).update_profile(
        account.id, {"experienceLevel": experience, "fitnessGoal": goal}
    )
    echo_success(f"Created user {account.email} ({account.id})")

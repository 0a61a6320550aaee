"""Sets and reps prescription per fitness goal."""

from typing import NamedTuple

from ..models.user import FitnessGoal


class Volume(NamedTuple):
    sets: int
    reps: str


GOAL_VOLUME: dict[str, Volume] = {
    FitnessGoal.STRENGTH.value: Volume(5, "5"),
    FitnessGoal.MUSCLE_GAIN.value: Volume(3, "8-12"),
    FitnessGoal.FAT_LOSS.value: Volume(3, "12-15"),
}
DEFAULT_VOLUME = Volume(3, "10")


def get_volume(goal: str | None) -> Volume:
    """Volume for a goal; unknown or missing goals get 3 x 10."""
    if goal is None:
        return DEFAULT_VOLUME
    return GOAL_VOLUME.get(goal, DEFAULT_VOLUME)

"""Weekly day structure for each training split."""

from dataclasses import dataclass

from ..models.plan import PlanDay, SplitType


@dataclass(frozen=True)
class SplitDay:
    """One day of a split template."""

    day_number: int
    day_name: str
    focus: str
    is_rest_day: bool = False

    def to_plan_day(self) -> PlanDay:
        return PlanDay(
            day_number=self.day_number,
            day_name=self.day_name,
            focus=self.focus,
            is_rest_day=self.is_rest_day,
        )


REST = "Rest"
PUSH_FOCUS = "Chest, Shoulders, Triceps"
PULL_FOCUS = "Back, Biceps, Traps"
LEGS_FOCUS = "Legs, Quads, Hamstrings, Glutes, Calves"

PPL_WEEK: tuple[SplitDay, ...] = (
    SplitDay(1, "Push", PUSH_FOCUS),
    SplitDay(2, "Pull", PULL_FOCUS),
    SplitDay(3, "Legs", LEGS_FOCUS),
    SplitDay(4, REST, REST, is_rest_day=True),
    SplitDay(5, "Push", PUSH_FOCUS),
    SplitDay(6, "Pull", PULL_FOCUS),
    SplitDay(7, REST, REST, is_rest_day=True),
)

FULL_BODY_WEEK: tuple[SplitDay, ...] = (
    SplitDay(1, "Full Body A", "Chest, Back, Legs, Shoulders"),
    SplitDay(2, REST, REST, is_rest_day=True),
    SplitDay(3, "Full Body B", "Legs, Back, Chest, Arms"),
    SplitDay(4, REST, REST, is_rest_day=True),
    SplitDay(5, "Full Body C", "Glutes, Shoulders, Back, Core"),
    SplitDay(6, REST, REST, is_rest_day=True),
    SplitDay(7, REST, REST, is_rest_day=True),
)

SPLIT_TEMPLATES: dict[str, tuple[SplitDay, ...]] = {
    SplitType.PPL.value: PPL_WEEK,
}


def is_known_split(split_type: str) -> bool:
    """Whether the token is one of the accepted split types."""
    return split_type in {s.value for s in SplitType}


def get_split_days(split_type: str) -> list[SplitDay]:
    """Day structure for a split.

    Only push/pull/legs has a dedicated week; every other token, known or
    not, gets the full-body week.
    """
    return list(SPLIT_TEMPLATES.get(split_type, FULL_BODY_WEEK))

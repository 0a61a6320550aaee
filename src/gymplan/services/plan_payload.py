"""Validation of weekly plan payloads returned by the AI service.

Both AI plan generation and the template fallback go through
`validate_plan_payload`; they only differ in strictness.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidUpstreamResponse

DEFAULT_SETS = 3
DEFAULT_REPS = "10"

# Shape the AI is asked to answer with
PLAN_RESPONSE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "days": {
            "type": "array",
            "minItems": 7,
            "maxItems": 7,
            "items": {
                "type": "object",
                "properties": {
                    "dayNumber": {"type": "integer"},
                    "dayName": {"type": "string"},
                    "focus": {"type": "string"},
                    "isRestDay": {"type": "boolean"},
                    "exercises": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "muscleGroup": {"type": "string"},
                                "sets": {"type": "integer"},
                                "reps": {"type": "string"},
                                "notes": {"type": "string"},
                            },
                            "required": ["name", "muscleGroup", "sets", "reps"],
                        },
                    },
                },
                "required": ["dayNumber", "dayName", "isRestDay", "exercises"],
            },
        },
    },
    "required": ["days"],
}


class Strictness(str, Enum):
    """How much structural damage a payload may have."""

    STRICT = "strict"  # top-level `days` must be a list
    LENIENT = "lenient"  # anything unusable becomes an empty week


@dataclass
class PayloadExercise:
    name: str
    muscle_group: str = ""
    sets: int = DEFAULT_SETS
    reps: str = DEFAULT_REPS
    notes: str = ""


@dataclass
class PayloadDay:
    day_number: int
    day_name: str
    focus: str = ""
    is_rest_day: bool = False
    exercises: list[PayloadExercise] = field(default_factory=list)


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return default


def _as_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _parse_exercise(raw: Any) -> PayloadExercise | None:
    if not isinstance(raw, dict):
        return None
    name = _as_str(raw.get("name"), "")
    if not name:
        return None
    sets = _as_int(raw.get("sets"), DEFAULT_SETS)
    return PayloadExercise(
        name=name,
        muscle_group=_as_str(raw.get("muscleGroup"), ""),
        sets=sets if sets > 0 else DEFAULT_SETS,
        reps=_as_str(raw.get("reps"), DEFAULT_REPS),
        notes=_as_str(raw.get("notes"), ""),
    )


def _parse_day(raw: dict, position: int) -> PayloadDay:
    day_number = _as_int(raw.get("dayNumber"), position)
    is_rest_day = raw.get("isRestDay") is True
    exercises = []
    if not is_rest_day and isinstance(raw.get("exercises"), list):
        exercises = [
            ex for ex in (_parse_exercise(item) for item in raw["exercises"]) if ex
        ]
    return PayloadDay(
        day_number=day_number,
        day_name=_as_str(raw.get("dayName"), f"Day {day_number}"),
        focus=_as_str(raw.get("focus"), ""),
        is_rest_day=is_rest_day,
        exercises=exercises,
    )


def validate_plan_payload(
    payload: Any, strictness: Strictness = Strictness.STRICT
) -> list[PayloadDay]:
    """Coerce a plan payload into days.

    Per-day and per-exercise fields are always defaulted; non-object days
    and exercises are dropped and rest days never keep exercises.

    Raises:
        InvalidUpstreamResponse: in STRICT mode, when the payload is not
            an object with a `days` list.
    """
    days = payload.get("days") if isinstance(payload, dict) else None
    if not isinstance(days, list):
        if strictness is Strictness.STRICT:
            raise InvalidUpstreamResponse("AI returned an invalid plan: missing 'days' list")
        return []

    return [
        _parse_day(raw, position)
        for position, raw in enumerate(days, start=1)
        if isinstance(raw, dict)
    ]

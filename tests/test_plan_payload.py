"""Tests for plan payload validation."""

import pytest

from gymplan.errors import InvalidUpstreamResponse
from gymplan.services.plan_payload import Strictness, validate_plan_payload


class TestValidatePlanPayload:
    """Tests for coercing weekly plan payloads."""

    def test_missing_days_strict(self):
        """Test a payload without a days list is rejected in strict mode."""
        with pytest.raises(InvalidUpstreamResponse):
            validate_plan_payload({"plan": []})
        with pytest.raises(InvalidUpstreamResponse):
            validate_plan_payload({"days": "monday"}, Strictness.STRICT)
        with pytest.raises(InvalidUpstreamResponse):
            validate_plan_payload(["not", "an", "object"])

    def test_missing_days_lenient(self):
        assert validate_plan_payload({"plan": []}, Strictness.LENIENT) == []

    def test_fields_defaulted(self):
        """Test missing day and exercise fields get defaults."""
        days = validate_plan_payload({"days": [{"exercises": [{"name": "Plank"}]}]})

        assert len(days) == 1
        day = days[0]
        assert day.day_number == 1
        assert day.day_name == "Day 1"
        assert day.is_rest_day is False
        assert day.exercises[0].name == "Plank"
        assert day.exercises[0].sets == 3
        assert day.exercises[0].reps == "10"

    def test_values_coerced(self):
        days = validate_plan_payload(
            {
                "days": [
                    {
                        "dayNumber": "2",
                        "dayName": "Push",
                        "exercises": [{"name": "Dip", "sets": 4.0, "reps": 12}],
                    }
                ]
            }
        )

        assert days[0].day_number == 2
        assert days[0].exercises[0].sets == 4
        assert days[0].exercises[0].reps == "12"

    def test_garbage_dropped(self):
        """Test non-object days and unnamed exercises are dropped."""
        days = validate_plan_payload(
            {
                "days": [
                    "rest",
                    {"dayNumber": 2, "exercises": [None, {"sets": 3}, {"name": "Squat"}]},
                ]
            }
        )

        assert len(days) == 1
        assert [e.name for e in days[0].exercises] == ["Squat"]

    def test_rest_days_have_no_exercises(self):
        days = validate_plan_payload(
            {"days": [{"dayNumber": 4, "isRestDay": True, "exercises": [{"name": "Walk"}]}]}
        )
        assert days[0].is_rest_day is True
        assert days[0].exercises == []

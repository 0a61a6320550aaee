"""Tests for weekly plan generation."""

import asyncio
import json
import random

import pytest

from gymplan.db import (
    EquipmentRepository,
    ExerciseRepository,
    WorkoutPlanRepository,
)
from gymplan.errors import InvalidUpstreamResponse, NotFoundError
from gymplan.models.equipment import Equipment, EquipmentCategory
from gymplan.models.exercises import Exercise, ExerciseCategory, ExerciseEquipment
from gymplan.services.plan_generator import PlanGenerator, filter_available_exercises


def all_equipment_ids(db_path) -> list[str]:
    return [e.id for e in asyncio.run(EquipmentRepository(db_path).list_all())]


def exercise_names(plan) -> set[str]:
    return {item.exercise.name for day in plan.days for item in day.exercises}


@pytest.fixture
def tiny_catalog(empty_db):
    """One bodyweight exercise and one that needs a barbell."""

    async def build():
        barbell = Equipment(name="Barbell", category=EquipmentCategory.FREE_WEIGHTS)
        await EquipmentRepository(empty_db).create(barbell)
        exercises = ExerciseRepository(empty_db)
        await exercises.add(
            Exercise(
                name="Push-up",
                muscle_group="Chest, Triceps",
                category=ExerciseCategory.BODYWEIGHT.value,
            )
        )
        await exercises.add(
            Exercise(
                name="Bench Press",
                muscle_group="Chest",
                equipment=[ExerciseEquipment(equipment_id=barbell.id)],
            )
        )
        return barbell

    barbell = asyncio.run(build())
    return empty_db, barbell


def week_payload(exercise_name: str = "Push-up") -> dict:
    days = []
    for number in range(1, 8):
        rest = number in (4, 7)
        days.append(
            {
                "dayNumber": number,
                "dayName": "Rest" if rest else f"Day {number}",
                "focus": "Rest" if rest else "Chest",
                "isRestDay": rest,
                "exercises": [] if rest else [
                    {"name": exercise_name, "muscleGroup": "Chest", "sets": 4, "reps": "6-8"},
                    {"name": "Sled Push", "muscleGroup": "Legs", "sets": 3, "reps": "20m"},
                ],
            }
        )
    return {"days": days}


class TestFilterAvailableExercises:
    """Tests for equipment filtering."""

    def test_requires_all_primary_equipment(self):
        """Test partial equipment coverage disqualifies an exercise."""
        bench = Exercise(
            name="Bench Press",
            muscle_group="Chest",
            equipment=[ExerciseEquipment("barbell"), ExerciseEquipment("bench")],
        )
        push_up = Exercise(name="Push-up", muscle_group="Chest")
        fly = Exercise(
            name="Cable Fly",
            muscle_group="Chest",
            equipment=[
                ExerciseEquipment("cable"),
                ExerciseEquipment("bench", is_primary=False),
            ],
        )
        catalog = [bench, push_up, fly]

        assert filter_available_exercises(catalog, {"barbell"}) == [push_up]
        assert filter_available_exercises(catalog, {"barbell", "bench"}) == [bench, push_up]
        assert filter_available_exercises(catalog, {"cable"}) == [push_up, fly]
        assert filter_available_exercises(catalog, set()) == [push_up]


class TestGenerate:
    """Tests for catalog-driven generation."""

    def test_ppl_week_structure(self, seeded_db, make_user):
        """Test a push/pull/legs week with strength volume."""
        user = make_user(seeded_db, fitness_goal="strength")
        equipment_ids = all_equipment_ids(seeded_db)

        plan = asyncio.run(
            PlanGenerator(seeded_db, rng=random.Random(1)).generate(
                user.id, "ppl", equipment_ids
            )
        )

        assert plan.is_active
        assert [d.day_name for d in plan.days] == [
            "Push", "Pull", "Legs", "Rest", "Push", "Pull", "Rest"
        ]
        assert [d.day_number for d in plan.days if d.is_rest_day] == [4, 7]
        for day in plan.days:
            if day.is_rest_day:
                assert day.exercises == []
                continue
            assert day.exercises
            assert [e.order_index for e in day.exercises] == list(range(len(day.exercises)))
            assert all(e.sets == 5 and e.reps == "5" for e in day.exercises)

    def test_only_available_exercises_selected(self, seeded_db, make_user):
        """Test every selected exercise is doable with the given equipment."""
        user = make_user(seeded_db)
        dumbbells = asyncio.run(EquipmentRepository(seeded_db).get_by_name("Dumbbells"))
        catalog = {e.id: e for e in asyncio.run(ExerciseRepository(seeded_db).list_all())}

        plan = asyncio.run(
            PlanGenerator(seeded_db, rng=random.Random(3)).generate(
                user.id, "ppl", [dumbbells.id]
            )
        )

        for day in plan.days:
            for item in day.exercises:
                assert catalog[item.exercise_id].is_available_with({dumbbells.id})
                assert item.sets == 3 and item.reps == "10"

    def test_fat_loss_without_equipment(self, tiny_catalog, make_user):
        """Test only bodyweight exercises are chosen when no equipment is given."""
        db_path, _ = tiny_catalog
        user = make_user(db_path, fitness_goal="fat_loss")

        plan = asyncio.run(PlanGenerator(db_path).generate(user.id, "ppl", []))

        assert len(plan.training_days) == 5
        assert exercise_names(plan) == {"Push-up"}
        for day in plan.days:
            assert all(e.sets == 3 and e.reps == "12-15" for e in day.exercises)

    def test_equipment_unlocks_exercises(self, tiny_catalog, make_user):
        db_path, barbell = tiny_catalog
        user = make_user(db_path, fitness_goal="muscle_gain")

        plan = asyncio.run(PlanGenerator(db_path).generate(user.id, "ppl", [barbell.id]))

        assert exercise_names(plan) == {"Push-up", "Bench Press"}

    def test_same_seed_same_plan(self, seeded_db, make_user):
        """Test seeded generators select identical exercises."""
        user = make_user(seeded_db)
        equipment_ids = all_equipment_ids(seeded_db)

        def selection(seed):
            plan = asyncio.run(
                PlanGenerator(seeded_db, rng=random.Random(seed)).generate(
                    user.id, "ppl", equipment_ids
                )
            )
            return [[e.exercise_id for e in day.exercises] for day in plan.days]

        assert selection(99) == selection(99)

    def test_unknown_split_falls_back_to_full_body(self, seeded_db, make_user, caplog):
        user = make_user(seeded_db)

        plan = asyncio.run(PlanGenerator(seeded_db).generate(user.id, "yoga", []))

        assert [d.day_name for d in plan.training_days] == [
            "Full Body A", "Full Body B", "Full Body C"
        ]
        assert len(plan.days) == 7
        assert "Unknown split type" in caplog.text

    def test_upper_lower_uses_full_body_week(self, seeded_db, make_user):
        user = make_user(seeded_db)
        plan = asyncio.run(PlanGenerator(seeded_db).generate(user.id, "upper_lower", []))
        assert len(plan.training_days) == 3

    def test_unknown_user(self, seeded_db):
        with pytest.raises(NotFoundError, match="User not found"):
            asyncio.run(PlanGenerator(seeded_db).generate("missing", "ppl", []))


class TestPlanActivation:
    """Tests for active plan bookkeeping."""

    def test_new_plan_replaces_active_plan(self, seeded_db, make_user):
        """Test only the newest plan stays active."""
        user = make_user(seeded_db)
        generator = PlanGenerator(seeded_db)

        first = asyncio.run(generator.generate(user.id, "ppl", []))
        second = asyncio.run(generator.generate(user.id, "full_body", []))
        current = asyncio.run(generator.get_current_plan(user.id))
        old = asyncio.run(WorkoutPlanRepository(seeded_db).get(first.id))

        assert current.id == second.id
        assert old.is_active is False

    def test_failed_save_rolls_back(self, seeded_db, make_user, monkeypatch):
        """Test a failure while storing leaves the previous plan untouched."""
        user = make_user(seeded_db)
        generator = PlanGenerator(seeded_db)
        first = asyncio.run(generator.generate(user.id, "ppl", []))

        async def broken_create(plan, db=None):
            raise RuntimeError("disk full")

        monkeypatch.setattr(generator.plan_repo, "create", broken_create)
        with pytest.raises(RuntimeError):
            asyncio.run(generator.generate(user.id, "ppl", []))

        repo = WorkoutPlanRepository(seeded_db)
        assert asyncio.run(repo.count_for_user(user.id)) == 1
        assert asyncio.run(repo.get_active(user.id)).id == first.id

    def test_no_current_plan(self, seeded_db, make_user):
        user = make_user(seeded_db)
        assert asyncio.run(PlanGenerator(seeded_db).get_current_plan(user.id)) is None


class TestGenerateWithAI:
    """Tests for AI-driven generation and its fallback."""

    def test_uses_ai_answer(self, seeded_db, make_user, fake_ai):
        """Test AI exercises are stored, creating unknown ones."""
        user = make_user(seeded_db)
        client = fake_ai(answer=json.dumps(week_payload()))
        generator = PlanGenerator(seeded_db, ai_client=client, ai_plans_enabled=True)

        plan = asyncio.run(generator.generate_with_ai(user.id, "ppl", []))

        assert len(client.calls) == 1
        assert client.calls[0]["schema"] is not None
        assert exercise_names(plan) == {"Push-up", "Sled Push"}
        first_day = plan.days[0]
        assert [(e.sets, e.reps) for e in first_day.exercises] == [(4, "6-8"), (3, "20m")]
        assert plan.days[3].exercises == []

        sled = asyncio.run(ExerciseRepository(seeded_db).get_by_name("Sled Push"))
        assert sled.category == ExerciseCategory.AI_GENERATED.value

    def test_fenced_answer_accepted(self, seeded_db, make_user, fake_ai):
        user = make_user(seeded_db)
        answer = "```json\n" + json.dumps(week_payload()) + "\n```"
        generator = PlanGenerator(
            seeded_db, ai_client=fake_ai(answer=answer), ai_plans_enabled=True
        )

        plan = asyncio.run(generator.generate_with_ai(user.id, "ppl", []))

        assert "Sled Push" in exercise_names(plan)

    def test_falls_back_when_ai_fails(self, seeded_db, make_user, fake_ai):
        """Test a failing AI call yields the bodyweight template plan."""
        user = make_user(seeded_db, fitness_goal="strength")
        generator = PlanGenerator(
            seeded_db, ai_client=fake_ai(error=TimeoutError()), ai_plans_enabled=True
        )

        plan = asyncio.run(generator.generate_with_ai(user.id, "ppl", []))

        catalog = {e.name: e for e in asyncio.run(ExerciseRepository(seeded_db).list_all())}
        assert len(plan.training_days) == 5
        assert exercise_names(plan)
        assert all(catalog[name].is_bodyweight for name in exercise_names(plan))
        for day in plan.days:
            assert all(e.sets == 5 and e.reps == "5" for e in day.exercises)

    def test_falls_back_on_non_json_answer(self, seeded_db, make_user, fake_ai):
        user = make_user(seeded_db)
        generator = PlanGenerator(
            seeded_db, ai_client=fake_ai(answer="Here is your plan: ..."), ai_plans_enabled=True
        )

        plan = asyncio.run(generator.generate_with_ai(user.id, "ppl", []))

        assert "Sled Push" not in exercise_names(plan)
        assert len(plan.days) == 7

    def test_fallback_is_deterministic(self, seeded_db, make_user):
        """Test the template plan does not depend on randomness."""
        user = make_user(seeded_db)

        def selection(seed):
            generator = PlanGenerator(seeded_db, rng=random.Random(seed))
            plan = asyncio.run(generator.generate_with_ai(user.id, "ppl", []))
            return [[e.exercise.name for e in day.exercises] for day in plan.days]

        assert selection(1) == selection(2)

    def test_invalid_payload_raises(self, seeded_db, make_user, fake_ai):
        """Test JSON without a days list is an upstream error, not a fallback."""
        user = make_user(seeded_db)
        generator = PlanGenerator(
            seeded_db, ai_client=fake_ai(answer='{"plan": "rest"}'), ai_plans_enabled=True
        )

        with pytest.raises(InvalidUpstreamResponse):
            asyncio.run(generator.generate_with_ai(user.id, "ppl", []))
        assert asyncio.run(WorkoutPlanRepository(seeded_db).count_for_user(user.id)) == 0

    def test_disabled_ai_is_not_called(self, seeded_db, make_user, fake_ai):
        user = make_user(seeded_db)
        client = fake_ai(answer=json.dumps(week_payload()))

        plan = asyncio.run(PlanGenerator(seeded_db, ai_client=client).generate_with_ai(
            user.id, "ppl", []
        ))

        assert client.calls == []
        assert "Sled Push" not in exercise_names(plan)

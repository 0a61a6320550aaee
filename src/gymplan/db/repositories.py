"""Data access layer for gymplan.

Every repository opens its own connection per call. Write methods also
accept an already open connection (`db=`) so several writes can share
one `transaction()`.
"""

from contextlib import asynccontextmanager
from datetime import date, datetime
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..models.equipment import Equipment, EquipmentCategory, UserEquipment
from ..models.exercises import Exercise, ExerciseEquipment
from ..models.gym import Gym
from ..models.plan import PlanDay, PlanExercise, WorkoutPlan
from ..models.progress import WorkoutProgress
from ..models.user import User
from .engine import connect, get_db_path, new_id


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class _Repository:
    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @asynccontextmanager
    async def _connect(
        self, db: aiosqlite.Connection | None = None
    ) -> AsyncIterator[aiosqlite.Connection]:
        """Reuse the caller's connection, or open one and commit on exit."""
        if db is not None:
            yield db
            return
        async with connect(self.db_path) as conn:
            yield conn
            await conn.commit()


class UserRepository(_Repository):
    """Repository for users."""

    async def create(self, user: User, db: aiosqlite.Connection | None = None) -> str:
        """Create a new user."""
        user.id = user.id or new_id()
        async with self._connect(db) as conn:
            await conn.execute(
                """
                INSERT INTO users
                (id, email, password_hash, name, age, height, weight, unit,
                 experience_level, fitness_goal, workout_days_per_week,
                 session_duration, selected_gym_id)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    user.email,
                    user.password_hash,
                    user.name,
                    user.age,
                    user.height,
                    user.weight,
                    user.unit,
                    user.experience_level,
                    user.fitness_goal,
                    user.workout_days_per_week,
                    user.session_duration,
                    user.selected_gym_id,
                ),
            )
        return user.id

    async def get(self, user_id: str) -> User | None:
        """Get a user by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM users WHERE lower(email) = lower(?)", (email,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def update(self, user: User) -> None:
        """Update an existing user's profile fields."""
        if user.id is None:
            raise ValueError("User must have an ID to update")

        async with self._connect() as db:
            await db.execute(
                """
                UPDATE users SET
                    name = ?, age = ?, height = ?, weight = ?, unit = ?,
                    experience_level = ?, fitness_goal = ?,
                    workout_days_per_week = ?, session_duration = ?,
                    selected_gym_id = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    user.name,
                    user.age,
                    user.height,
                    user.weight,
                    user.unit,
                    user.experience_level,
                    user.fitness_goal,
                    user.workout_days_per_week,
                    user.session_duration,
                    user.selected_gym_id,
                    user.id,
                ),
            )

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        """Convert a database row to a User."""
        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            name=row["name"],
            age=row["age"],
            height=row["height"],
            weight=row["weight"],
            unit=row["unit"],
            experience_level=row["experience_level"],
            fitness_goal=row["fitness_goal"],
            workout_days_per_week=row["workout_days_per_week"],
            session_duration=row["session_duration"],
            selected_gym_id=row["selected_gym_id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class GymRepository(_Repository):
    """Repository for gyms."""

    async def create(self, gym: Gym) -> str:
        gym.id = gym.id or new_id()
        async with self._connect() as db:
            await db.execute(
                "INSERT INTO gyms (id, name, address, latitude, longitude) VALUES (?, ?, ?, ?, ?)",
                (gym.id, gym.name, gym.address, gym.latitude, gym.longitude),
            )
        return gym.id

    async def get(self, gym_id: str, with_equipment: bool = False) -> Gym | None:
        """Get a gym, optionally with the equipment links stored there."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM gyms WHERE id = ?", (gym_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            gym = self._row_to_gym(row)
            if with_equipment:
                cursor = await db.execute(
                    "SELECT * FROM user_equipment WHERE gym_id = ? ORDER BY created_at",
                    (gym_id,),
                )
                gym.user_equipment = [
                    UserEquipmentRepository._row_to_link(r) for r in await cursor.fetchall()
                ]
            return gym

    async def list_all(self) -> list[Gym]:
        """List all gyms."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM gyms ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_gym(row) for row in rows]

    def _row_to_gym(self, row: aiosqlite.Row) -> Gym:
        return Gym(
            id=row["id"],
            name=row["name"],
            address=row["address"],
            latitude=row["latitude"],
            longitude=row["longitude"],
        )


class EquipmentRepository(_Repository):
    """Repository for the equipment catalog."""

    async def create(
        self, equipment: Equipment, db: aiosqlite.Connection | None = None
    ) -> str:
        equipment.id = equipment.id or new_id()
        async with self._connect(db) as conn:
            await conn.execute(
                "INSERT INTO equipment (id, name, category) VALUES (?, ?, ?)",
                (equipment.id, equipment.name, equipment.category.value),
            )
        return equipment.id

    async def get(
        self, equipment_id: str, db: aiosqlite.Connection | None = None
    ) -> Equipment | None:
        async with self._connect(db) as conn:
            cursor = await conn.execute(
                "SELECT * FROM equipment WHERE id = ?", (equipment_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_equipment(row)

    async def get_by_name(
        self, name: str, db: aiosqlite.Connection | None = None
    ) -> Equipment | None:
        """Get equipment by name (case-insensitive)."""
        async with self._connect(db) as conn:
            cursor = await conn.execute(
                "SELECT * FROM equipment WHERE lower(name) = lower(?)", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_equipment(row)

    async def list_all(self) -> list[Equipment]:
        """List the whole catalog."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM equipment ORDER BY category, name")
            rows = await cursor.fetchall()
            return [self._row_to_equipment(row) for row in rows]

    @staticmethod
    def _row_to_equipment(row: aiosqlite.Row) -> Equipment:
        return Equipment(
            id=row["id"],
            name=row["name"],
            category=EquipmentCategory.parse(row["category"]),
        )


class UserEquipmentRepository(_Repository):
    """Repository for user equipment inventories."""

    async def upsert(
        self,
        user_id: str,
        equipment_id: str,
        gym_id: str | None = None,
        db: aiosqlite.Connection | None = None,
    ) -> None:
        """Link equipment to a user; an existing link is kept, not duplicated."""
        async with self._connect(db) as conn:
            await conn.execute(
                """
                INSERT INTO user_equipment (id, user_id, equipment_id, gym_id)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (user_id, equipment_id) DO UPDATE SET
                    gym_id = COALESCE(excluded.gym_id, user_equipment.gym_id)
                """,
                (new_id(), user_id, equipment_id, gym_id),
            )

    async def list_for_user(self, user_id: str) -> list[UserEquipment]:
        """Get a user's equipment links with the equipment hydrated."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT ue.*, e.name AS equipment_name, e.category AS equipment_category
                FROM user_equipment ue
                JOIN equipment e ON e.id = ue.equipment_id
                WHERE ue.user_id = ?
                ORDER BY e.name
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            links = []
            for row in rows:
                link = self._row_to_link(row)
                link.equipment = Equipment(
                    id=row["equipment_id"],
                    name=row["equipment_name"],
                    category=EquipmentCategory.parse(row["equipment_category"]),
                )
                links.append(link)
            return links

    @staticmethod
    def _row_to_link(row: aiosqlite.Row) -> UserEquipment:
        return UserEquipment(
            id=row["id"],
            user_id=row["user_id"],
            equipment_id=row["equipment_id"],
            gym_id=row["gym_id"],
            created_at=_parse_timestamp(row["created_at"]),
        )


class ExerciseRepository(_Repository):
    """Repository for the exercise library."""

    async def list_all(self) -> list[Exercise]:
        """List all exercises with their equipment requirements."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            exercises = [self._row_to_exercise(row) for row in await cursor.fetchall()]

            cursor = await db.execute("SELECT * FROM exercise_equipment")
            by_id = {ex.id: ex for ex in exercises}
            for row in await cursor.fetchall():
                exercise = by_id.get(row["exercise_id"])
                if exercise is not None:
                    exercise.equipment.append(
                        ExerciseEquipment(
                            equipment_id=row["equipment_id"],
                            is_primary=bool(row["is_primary"]),
                        )
                    )
            return exercises

    async def get(
        self, exercise_id: str, db: aiosqlite.Connection | None = None
    ) -> Exercise | None:
        async with self._connect(db) as conn:
            cursor = await conn.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def get_by_name(
        self, name: str, db: aiosqlite.Connection | None = None
    ) -> Exercise | None:
        """Get an exercise by name (case-insensitive)."""
        async with self._connect(db) as conn:
            cursor = await conn.execute(
                "SELECT * FROM exercises WHERE lower(name) = lower(?)", (name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def add(
        self, exercise: Exercise, db: aiosqlite.Connection | None = None
    ) -> str:
        """Add a new exercise and its equipment links."""
        exercise.id = exercise.id or new_id()
        async with self._connect(db) as conn:
            await conn.execute(
                """
                INSERT INTO exercises (id, name, muscle_group, category, difficulty)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    exercise.id,
                    exercise.name,
                    exercise.muscle_group,
                    exercise.category,
                    exercise.difficulty,
                ),
            )
            for link in exercise.equipment:
                await conn.execute(
                    """
                    INSERT INTO exercise_equipment (exercise_id, equipment_id, is_primary)
                    VALUES (?, ?, ?)
                    """,
                    (exercise.id, link.equipment_id, int(link.is_primary)),
                )
        return exercise.id

    @staticmethod
    def _row_to_exercise(row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise (without equipment)."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            muscle_group=row["muscle_group"],
            category=row["category"],
            difficulty=row["difficulty"],
        )


class WorkoutPlanRepository(_Repository):
    """Repository for workout plans, their days and exercises."""

    async def create(self, plan: WorkoutPlan, db: aiosqlite.Connection | None = None) -> str:
        """Insert a plan with all of its days and exercises."""
        plan.id = plan.id or new_id()
        async with self._connect(db) as conn:
            await conn.execute(
                "INSERT INTO workout_plans (id, user_id, split_type, is_active) VALUES (?, ?, ?, ?)",
                (plan.id, plan.user_id, plan.split_type, int(plan.is_active)),
            )
            for day in plan.days:
                await self.add_day(plan.id, day, db=conn)
        return plan.id

    async def add_day(
        self, plan_id: str, day: PlanDay, db: aiosqlite.Connection | None = None
    ) -> str:
        """Insert a plan day and its exercises."""
        if day.is_rest_day and day.exercises:
            raise ValueError(f"Rest day {day.day_number} cannot own exercises")

        day.id = day.id or new_id()
        day.plan_id = plan_id
        async with self._connect(db) as conn:
            await conn.execute(
                """
                INSERT INTO plan_days (id, plan_id, day_number, day_name, focus, is_rest_day)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (day.id, plan_id, day.day_number, day.day_name, day.focus, int(day.is_rest_day)),
            )
            for exercise in day.exercises:
                exercise.id = exercise.id or new_id()
                exercise.plan_day_id = day.id
                await conn.execute(
                    """
                    INSERT INTO plan_exercises
                    (id, plan_day_id, exercise_id, order_index, sets, reps, notes)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        exercise.id,
                        day.id,
                        exercise.exercise_id,
                        exercise.order_index,
                        exercise.sets,
                        exercise.reps,
                        exercise.notes,
                    ),
                )
        return day.id

    async def deactivate_for_user(
        self, user_id: str, db: aiosqlite.Connection | None = None
    ) -> int:
        """Mark every active plan of a user inactive."""
        async with self._connect(db) as conn:
            cursor = await conn.execute(
                "UPDATE workout_plans SET is_active = 0 WHERE user_id = ? AND is_active = 1",
                (user_id,),
            )
            return cursor.rowcount

    async def get(self, plan_id: str) -> WorkoutPlan | None:
        """Get a plan hydrated with days, exercises and exercise details."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM workout_plans WHERE id = ?", (plan_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._hydrate(db, row)

    async def get_active(self, user_id: str) -> WorkoutPlan | None:
        """Get the user's active plan (the newest, should several exist)."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_plans
                WHERE user_id = ? AND is_active = 1
                ORDER BY created_at DESC, rowid DESC
                LIMIT 1
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._hydrate(db, row)

    async def count_for_user(self, user_id: str) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM workout_plans WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def _hydrate(self, db: aiosqlite.Connection, row: aiosqlite.Row) -> WorkoutPlan:
        plan = WorkoutPlan(
            id=row["id"],
            user_id=row["user_id"],
            split_type=row["split_type"],
            is_active=bool(row["is_active"]),
            created_at=_parse_timestamp(row["created_at"]),
        )

        cursor = await db.execute(
            "SELECT * FROM plan_days WHERE plan_id = ? ORDER BY day_number", (plan.id,)
        )
        days = {}
        for day_row in await cursor.fetchall():
            day = PlanDay(
                id=day_row["id"],
                plan_id=plan.id,
                day_number=day_row["day_number"],
                day_name=day_row["day_name"],
                focus=day_row["focus"],
                is_rest_day=bool(day_row["is_rest_day"]),
            )
            days[day.id] = day
            plan.days.append(day)

        cursor = await db.execute(
            """
            SELECT pe.*, e.name AS exercise_name, e.muscle_group, e.category, e.difficulty
            FROM plan_exercises pe
            JOIN plan_days pd ON pd.id = pe.plan_day_id
            JOIN exercises e ON e.id = pe.exercise_id
            WHERE pd.plan_id = ?
            ORDER BY pd.day_number, pe.order_index
            """,
            (plan.id,),
        )
        for ex_row in await cursor.fetchall():
            days[ex_row["plan_day_id"]].exercises.append(
                PlanExercise(
                    id=ex_row["id"],
                    plan_day_id=ex_row["plan_day_id"],
                    exercise_id=ex_row["exercise_id"],
                    order_index=ex_row["order_index"],
                    sets=ex_row["sets"],
                    reps=ex_row["reps"],
                    notes=ex_row["notes"] or "",
                    exercise=Exercise(
                        id=ex_row["exercise_id"],
                        name=ex_row["exercise_name"],
                        muscle_group=ex_row["muscle_group"],
                        category=ex_row["category"],
                        difficulty=ex_row["difficulty"],
                    ),
                )
            )
        return plan


class WorkoutProgressRepository(_Repository):
    """Repository for per-date exercise completion."""

    async def upsert(
        self, progress: WorkoutProgress, db: aiosqlite.Connection | None = None
    ) -> WorkoutProgress:
        """Insert the record, or update completion of the one for (user, exercise, date).

        Returns the stored record.
        """
        async with self._connect(db) as conn:
            await conn.execute(
                """
                INSERT INTO workout_progress
                (id, user_id, plan_id, exercise_id, workout_date, day_index,
                 week_number, completed, completed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (user_id, exercise_id, workout_date) DO UPDATE SET
                    completed = excluded.completed,
                    completed_at = excluded.completed_at
                """,
                (
                    progress.id or new_id(),
                    progress.user_id,
                    progress.plan_id,
                    progress.exercise_id,
                    progress.workout_date.isoformat(),
                    progress.day_index,
                    progress.week_number,
                    int(progress.completed),
                    progress.completed_at.isoformat() if progress.completed_at else None,
                ),
            )
            return await self.get_by_key(
                progress.user_id, progress.exercise_id, progress.workout_date, db=conn
            )

    async def get_by_key(
        self,
        user_id: str,
        exercise_id: str,
        workout_date: date,
        db: aiosqlite.Connection | None = None,
    ) -> WorkoutProgress | None:
        """Find the record for (user, exercise, date)."""
        async with self._connect(db) as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM workout_progress
                WHERE user_id = ? AND exercise_id = ? AND workout_date = ?
                """,
                (user_id, exercise_id, workout_date.isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_progress(row)

    async def list_between(
        self, user_id: str, start: date, end: date
    ) -> list[WorkoutProgress]:
        """Records with a workout date in [start, end]."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_progress
                WHERE user_id = ? AND workout_date >= ? AND workout_date <= ?
                ORDER BY workout_date, rowid
                """,
                (user_id, start.isoformat(), end.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_progress(row) for row in rows]

    def _row_to_progress(self, row: aiosqlite.Row) -> WorkoutProgress:
        """Convert a database row to a WorkoutProgress."""
        return WorkoutProgress(
            id=row["id"],
            user_id=row["user_id"],
            plan_id=row["plan_id"],
            exercise_id=row["exercise_id"],
            workout_date=date.fromisoformat(row["workout_date"]),
            day_index=row["day_index"],
            week_number=row["week_number"],
            completed=bool(row["completed"]),
            completed_at=_parse_timestamp(row["completed_at"]),
        )

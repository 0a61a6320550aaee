"""Database engine setup, transactions and catalog seeding."""

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import DATA_DIR

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "gymplan.db"


def new_id() -> str:
    """Generate an opaque row identifier."""
    return uuid.uuid4().hex


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with row access by name and foreign keys enforced."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


@asynccontextmanager
async def transaction(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Run a group of writes atomically.

    Commits when the block exits normally and rolls back on any
    exception, so partially written state is never visible.
    """
    async with connect(db_path) as db:
        await db.execute("BEGIN")
        try:
            yield db
        except BaseException:
            await db.rollback()
            raise
        await db.commit()


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS gyms (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        address TEXT NOT NULL DEFAULT '',
        latitude REAL NOT NULL,
        longitude REAL NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        password_hash TEXT NOT NULL,
        name TEXT,
        age INTEGER,
        height REAL,
        weight REAL,
        unit TEXT DEFAULT 'metric',
        experience_level TEXT,
        fitness_goal TEXT,
        workout_days_per_week INTEGER,
        session_duration INTEGER,
        selected_gym_id TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (selected_gym_id) REFERENCES gyms(id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS equipment (
        id TEXT PRIMARY KEY,
        name TEXT UNIQUE NOT NULL,
        category TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_equipment (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        equipment_id TEXT NOT NULL,
        gym_id TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (user_id, equipment_id),
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY (equipment_id) REFERENCES equipment(id),
        FOREIGN KEY (gym_id) REFERENCES gyms(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS exercises (
        id TEXT PRIMARY KEY,
        name TEXT UNIQUE NOT NULL,
        muscle_group TEXT NOT NULL,
        category TEXT NOT NULL,
        difficulty TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS exercise_equipment (
        exercise_id TEXT NOT NULL,
        equipment_id TEXT NOT NULL,
        is_primary INTEGER NOT NULL DEFAULT 1,
        PRIMARY KEY (exercise_id, equipment_id),
        FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE,
        FOREIGN KEY (equipment_id) REFERENCES equipment(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS workout_plans (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        split_type TEXT NOT NULL,
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS plan_days (
        id TEXT PRIMARY KEY,
        plan_id TEXT NOT NULL,
        day_number INTEGER NOT NULL,
        day_name TEXT NOT NULL,
        focus TEXT NOT NULL DEFAULT '',
        is_rest_day INTEGER NOT NULL DEFAULT 0,
        FOREIGN KEY (plan_id) REFERENCES workout_plans(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS plan_exercises (
        id TEXT PRIMARY KEY,
        plan_day_id TEXT NOT NULL,
        exercise_id TEXT NOT NULL,
        order_index INTEGER NOT NULL,
        sets INTEGER NOT NULL,
        reps TEXT NOT NULL,
        notes TEXT DEFAULT '',
        UNIQUE (plan_day_id, order_index),
        FOREIGN KEY (plan_day_id) REFERENCES plan_days(id) ON DELETE CASCADE,
        FOREIGN KEY (exercise_id) REFERENCES exercises(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS workout_progress (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        plan_id TEXT,
        exercise_id TEXT NOT NULL,
        workout_date TEXT NOT NULL,
        day_index INTEGER,
        week_number INTEGER,
        completed INTEGER NOT NULL DEFAULT 0,
        completed_at TIMESTAMP,
        UNIQUE (user_id, exercise_id, workout_date),
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY (plan_id) REFERENCES workout_plans(id) ON DELETE SET NULL,
        FOREIGN KEY (exercise_id) REFERENCES exercises(id)
    )
    """,
    # Indexes for common queries
    "CREATE INDEX IF NOT EXISTS idx_user_equipment_user ON user_equipment(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_workout_plans_user ON workout_plans(user_id, is_active)",
    "CREATE INDEX IF NOT EXISTS idx_plan_days_plan ON plan_days(plan_id)",
    "CREATE INDEX IF NOT EXISTS idx_plan_exercises_day ON plan_exercises(plan_day_id)",
    "CREATE INDEX IF NOT EXISTS idx_workout_progress_user_date ON workout_progress(user_id, workout_date)",
]


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        for statement in SCHEMA:
            await db.execute(statement)
        await db.commit()
    logger.info("Database schema ready at %s", db_path)


async def seed_catalog(db_path: Path | None = None) -> dict[str, int]:
    """Seed gyms, equipment and exercises.

    Safe to run repeatedly: existing rows (matched by name) are kept.
    Returns the number of rows inserted per table.
    """
    from ..models.equipment import SEED_EQUIPMENT
    from ..models.exercises import SEED_EXERCISES
    from ..models.gym import SEED_GYMS

    if db_path is None:
        db_path = get_db_path()

    counts = {"gyms": 0, "equipment": 0, "exercises": 0}
    async with transaction(db_path) as db:
        for gym in SEED_GYMS:
            cursor = await db.execute("SELECT 1 FROM gyms WHERE name = ?", (gym.name,))
            if await cursor.fetchone() is None:
                await db.execute(
                    "INSERT INTO gyms (id, name, address, latitude, longitude) VALUES (?, ?, ?, ?, ?)",
                    (new_id(), gym.name, gym.address, gym.latitude, gym.longitude),
                )
                counts["gyms"] += 1

        for item in SEED_EQUIPMENT:
            cursor = await db.execute(
                "INSERT OR IGNORE INTO equipment (id, name, category) VALUES (?, ?, ?)",
                (new_id(), item.name, item.category.value),
            )
            counts["equipment"] += cursor.rowcount

        cursor = await db.execute("SELECT id, name FROM equipment")
        equipment_ids = {row["name"]: row["id"] for row in await cursor.fetchall()}

        for seed in SEED_EXERCISES:
            exercise_id = new_id()
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises (id, name, muscle_group, category, difficulty)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    exercise_id,
                    seed.name,
                    seed.muscle_group,
                    seed.category.value,
                    seed.difficulty.value,
                ),
            )
            if cursor.rowcount == 0:
                continue
            counts["exercises"] += 1
            for equipment_name in seed.equipment_names:
                equipment_id = equipment_ids.get(equipment_name)
                if equipment_id is None:
                    logger.warning(
                        "Seed exercise %s references unknown equipment %s",
                        seed.name,
                        equipment_name,
                    )
                    continue
                await db.execute(
                    """
                    INSERT INTO exercise_equipment (exercise_id, equipment_id, is_primary)
                    VALUES (?, ?, 1)
                    """,
                    (exercise_id, equipment_id),
                )

    logger.info("Seeded catalog: %s", counts)
    return counts

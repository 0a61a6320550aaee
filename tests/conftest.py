"""Pytest configuration and fixtures."""

import asyncio
import random
import tempfile
from pathlib import Path

import pytest

from gymplan.config import Settings
from gymplan.db import UserRepository, init_db, seed_catalog
from gymplan.models.user import User


class FakeAIClient:
    """Stands in for the OpenAI client; answers with canned text."""

    def __init__(self, answer: str | None = None, error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[dict] = []

    async def complete_json(self, prompt, images=None, schema=None) -> str:
        self.calls.append({"prompt": prompt, "images": images, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.answer

    async def close(self) -> None:
        pass


def create_user(db_path: Path, email: str = "lifter@example.com", **profile) -> User:
    """Insert a user directly through the repository."""
    user = User(email=email, password_hash="not-a-real-hash", **profile)
    asyncio.run(UserRepository(db_path).create(user))
    return user


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def empty_db(temp_db_path):
    """Database with the schema but no rows."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def seeded_db(empty_db):
    """Database with the seed gyms, equipment and exercises."""
    asyncio.run(seed_catalog(empty_db))
    return empty_db


@pytest.fixture
def settings():
    """Settings pointing at a temporary, seeded data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        settings = Settings(
            data_dir=Path(tmpdir),
            environment="test",
            secret_key="test-secret",
            openai_api_key=None,
        )
        asyncio.run(init_db(settings.db_path))
        asyncio.run(seed_catalog(settings.db_path))
        yield settings


@pytest.fixture
def seeded_rng():
    return lambda: random.Random(1234)


@pytest.fixture
def fake_ai():
    """Factory for fake AI clients: `fake_ai(answer=...)` or `fake_ai(error=...)`."""
    return FakeAIClient


@pytest.fixture
def make_user():
    """Factory inserting users: `make_user(db_path, email=..., fitness_goal=...)`."""
    return create_user

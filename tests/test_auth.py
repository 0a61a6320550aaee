"""Tests for accounts, passwords and tokens."""

import asyncio
import time

import pytest

from gymplan.errors import AuthError, ConflictError, NotFoundError
from gymplan.services.auth import (
    AuthService,
    TokenSigner,
    UserService,
    hash_password,
    verify_password,
)


@pytest.fixture
def signer():
    return TokenSigner("test-secret", ttl_seconds=3600)


class TestPasswords:
    """Tests for password hashing."""

    def test_round_trip(self):
        stored = hash_password("correct horse")
        assert verify_password("correct horse", stored)
        assert not verify_password("wrong horse", stored)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash(self):
        assert not verify_password("anything", "garbage")


class TestTokenSigner:
    """Tests for bearer tokens."""

    def test_issue_and_verify(self, signer):
        assert signer.verify(signer.issue("user-1")) == "user-1"

    def test_tampered_token(self, signer):
        token = signer.issue("user-1")
        with pytest.raises(AuthError):
            signer.verify(token[:-1] + ("A" if token[-1] != "A" else "B"))

    def test_other_secret(self, signer):
        token = TokenSigner("other-secret", 3600).issue("user-1")
        with pytest.raises(AuthError):
            signer.verify(token)

    def test_expired(self, monkeypatch):
        signer = TokenSigner("test-secret", ttl_seconds=60)
        token = signer.issue("user-1")
        now = time.time()
        monkeypatch.setattr(time, "time", lambda: now + 120)

        with pytest.raises(AuthError, match="expired"):
            signer.verify(token)

    def test_malformed(self, signer):
        for token in ("", "abc", "a.b.c"):
            with pytest.raises(AuthError):
                signer.verify(token)

    def test_secret_required(self):
        with pytest.raises(ValueError):
            TokenSigner("", 60)


class TestAuthService:
    """Tests for registration and login."""

    def test_register_and_login(self, empty_db, signer):
        auth = AuthService(empty_db, signer)

        user, token = asyncio.run(auth.register("Ann@Example.com", "s3cret-pass", name="Ann"))
        again, login_token = asyncio.run(auth.login("ann@example.com", "s3cret-pass"))

        assert user.email == "ann@example.com"
        assert again.id == user.id
        assert asyncio.run(auth.authenticate(token)).id == user.id
        assert asyncio.run(auth.authenticate(login_token)).id == user.id

    def test_duplicate_email(self, empty_db, signer):
        auth = AuthService(empty_db, signer)
        asyncio.run(auth.register("ann@example.com", "s3cret-pass"))

        with pytest.raises(ConflictError, match="Email already in use"):
            asyncio.run(auth.register("ANN@example.com", "other-pass"))

    def test_wrong_password(self, empty_db, signer):
        auth = AuthService(empty_db, signer)
        asyncio.run(auth.register("ann@example.com", "s3cret-pass"))

        with pytest.raises(AuthError, match="Incorrect email or password"):
            asyncio.run(auth.login("ann@example.com", "nope"))
        with pytest.raises(AuthError):
            asyncio.run(auth.login("bob@example.com", "s3cret-pass"))

    def test_token_for_deleted_user(self, empty_db, signer):
        with pytest.raises(AuthError):
            asyncio.run(AuthService(empty_db, signer).authenticate(signer.issue("gone")))


class TestUserService:
    """Tests for profile updates."""

    def test_partial_update(self, empty_db, make_user):
        user = make_user(empty_db, age=30)
        users = UserService(empty_db)

        updated = asyncio.run(users.update_profile(
            user.id, {"fitnessGoal": "strength", "workoutDaysPerWeek": 4, "age": None}
        ))

        assert updated.fitness_goal == "strength"
        assert updated.workout_days_per_week == 4
        assert updated.age == 30
        assert "passwordHash" not in updated.to_dict()
        assert "password_hash" not in updated.to_dict()

    def test_missing_user(self, empty_db):
        with pytest.raises(NotFoundError):
            asyncio.run(UserService(empty_db).get_profile("missing"))

"""User registration, login and bearer tokens.

Tokens are `<payload>.<signature>`: a urlsafe-base64 JSON payload with
`sub` (user id) and `exp` (unix time), signed with HMAC-SHA256.
"""

import base64
import hashlib
import hmac
import json
import logging
import secrets
import time
from pathlib import Path

from ..db.repositories import UserRepository
from ..errors import AuthError, ConflictError, NotFoundError
from ..models.user import User

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def _ub64(text: str) -> bytes:
    pad = "=" * ((4 - len(text) % 4) % 4)
    return base64.urlsafe_b64decode((text + pad).encode())


def hash_password(password: str) -> str:
    """Salted PBKDF2-SHA256 hash as `iterations$salt$digest`."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return f"{PBKDF2_ITERATIONS}${_b64(salt)}${_b64(digest)}"


def verify_password(password: str, stored: str) -> bool:
    try:
        iterations, salt, digest = stored.split("$")
        candidate = hashlib.pbkdf2_hmac(
            "sha256", password.encode(), _ub64(salt), int(iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(candidate, _ub64(digest))


class TokenSigner:
    """Issues and checks signed bearer tokens."""

    def __init__(self, secret_key: str, ttl_seconds: int):
        if not secret_key:
            raise ValueError("A secret key is required to sign tokens")
        self._secret = secret_key.encode()
        self.ttl_seconds = ttl_seconds

    def _sign(self, payload: str) -> str:
        return _b64(hmac.new(self._secret, payload.encode(), hashlib.sha256).digest())

    def issue(self, user_id: str) -> str:
        payload = _b64(
            json.dumps({"sub": user_id, "exp": int(time.time()) + self.ttl_seconds}).encode()
        )
        return f"{payload}.{self._sign(payload)}"

    def verify(self, token: str) -> str:
        """Return the user id a token was issued for.

        Raises:
            AuthError: malformed, badly signed or expired token
        """
        try:
            payload, signature = token.split(".")
        except ValueError:
            raise AuthError("Invalid token") from None
        if not hmac.compare_digest(self._sign(payload).encode(), signature.encode()):
            raise AuthError("Invalid token")
        try:
            claims = json.loads(_ub64(payload))
            user_id, expires = claims["sub"], int(claims["exp"])
        except (ValueError, KeyError, TypeError):
            raise AuthError("Invalid token") from None
        if expires < time.time():
            raise AuthError("Your token has expired! Please log in again.")
        return user_id


class AuthService:
    """Account creation and authentication."""

    def __init__(self, db_path: Path, signer: TokenSigner | None = None):
        self.user_repo = UserRepository(db_path)
        self.signer = signer

    async def create_account(
        self,
        email: str,
        password: str,
        name: str | None = None,
        age: int | None = None,
    ) -> User:
        """Create an account.

        Raises:
            ConflictError: the email is already registered
        """
        if await self.user_repo.get_by_email(email) is not None:
            raise ConflictError("Email already in use")

        user = User(
            email=email.strip().lower(),
            password_hash=hash_password(password),
            name=name,
            age=age,
        )
        await self.user_repo.create(user)
        logger.info("Registered user %s", user.id)
        return user

    async def register(
        self,
        email: str,
        password: str,
        name: str | None = None,
        age: int | None = None,
    ) -> tuple[User, str]:
        """Create an account and return it with a fresh token."""
        user = await self.create_account(email, password, name, age)
        return user, self.signer.issue(user.id)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError("Incorrect email or password")
        return user, self.signer.issue(user.id)

    async def authenticate(self, token: str) -> User:
        """Resolve a bearer token to its user."""
        user = await self.user_repo.get(self.signer.verify(token))
        if user is None:
            raise AuthError("The user belonging to this token does no longer exist.")
        return user


class UserService:
    """Profile reads and updates."""

    def __init__(self, db_path: Path):
        self.user_repo = UserRepository(db_path)

    async def get_profile(self, user_id: str) -> User:
        user = await self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, user_id: str, data: dict) -> User:
        """Apply a partial profile update (API field names)."""
        user = await self.get_profile(user_id)
        user.apply_profile(data)
        await self.user_repo.update(user)
        return await self.get_profile(user_id)

"""Registration and login routes."""

from fastapi import APIRouter, Depends

from ...models.user import User
from ...services.auth import AuthService
from ..deps import get_auth_service, get_current_user
from ..schemas import LoginRequest, RegisterRequest

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session(user: User, token: str) -> dict:
    return {"status": "success", "token": token, "data": {"user": user.to_dict()}}


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = await auth.register(body.email, body.password, body.name, body.age)
    return _session(user, token)


@router.post("/login")
async def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user, token = await auth.login(body.email, body.password)
    return _session(user, token)


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """The user the bearer token belongs to."""
    return {"status": "success", "data": {"user": user.to_dict()}}

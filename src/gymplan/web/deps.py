"""Request dependencies: process state, services and the current user."""

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from fastapi import Depends, Header, Request

from ..clients.ai import AIClient
from ..config import Settings
from ..errors import AuthError
from ..models.user import User
from ..services.auth import AuthService, TokenSigner, UserService
from ..services.equipment import EquipmentService
from ..services.equipment_scan import EquipmentScanner
from ..services.gyms import GymService
from ..services.plan_generator import PlanGenerator
from ..services.progress import ProgressTracker


@dataclass
class AppState:
    """Everything built once per process and shared by requests."""

    settings: Settings
    signer: TokenSigner
    ai_client: AIClient | None = None
    rng_factory: Callable[[], random.Random] = field(default=random.Random)

    @property
    def db_path(self) -> Path:
        return self.settings.db_path


def get_state(request: Request) -> AppState:
    return request.app.state.gymplan


def get_auth_service(state: AppState = Depends(get_state)) -> AuthService:
    return AuthService(state.db_path, state.signer)


def get_user_service(state: AppState = Depends(get_state)) -> UserService:
    return UserService(state.db_path)


def get_equipment_service(state: AppState = Depends(get_state)) -> EquipmentService:
    return EquipmentService(state.db_path)


def get_scanner(state: AppState = Depends(get_state)) -> EquipmentScanner:
    return EquipmentScanner(state.ai_client)


def get_gym_service(state: AppState = Depends(get_state)) -> GymService:
    return GymService(state.db_path)


def get_plan_generator(state: AppState = Depends(get_state)) -> PlanGenerator:
    return PlanGenerator(
        state.db_path,
        ai_client=state.ai_client,
        rng=state.rng_factory(),
        ai_plans_enabled=state.settings.ai_plans_enabled,
    )


def get_progress_tracker(state: AppState = Depends(get_state)) -> ProgressTracker:
    return ProgressTracker(state.db_path)


async def get_current_user(
    authorization: str | None = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the `Authorization: Bearer <token>` header to a user."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("You are not logged in! Please log in to get access.")
    return await auth.authenticate(authorization[len("Bearer "):].strip())

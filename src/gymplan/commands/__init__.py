"""CLI commands for gymplan."""

from .equipment import equipment
from .gyms import gyms
from .init import init
from .plan import plan
from .serve import serve
from .user import user

__all__ = [
    "equipment",
    "gyms",
    "init",
    "plan",
    "serve",
    "user",
]

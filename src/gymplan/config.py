"""Runtime configuration and logging setup."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Process-wide settings, read once at startup."""

    data_dir: Path = DATA_DIR
    environment: str = "production"
    secret_key: str = ""
    token_ttl: int = 7 * 24 * 3600
    openai_api_key: str | None = None
    ai_model: str = "gpt-4o-mini"
    ai_timeout: float = 60.0
    ai_plans_enabled: bool = False
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "gymplan.db"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Build settings from the environment (and a .env file if present)."""
    load_dotenv()

    data_dir = os.getenv("GYMPLAN_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir) if data_dir else DATA_DIR,
        environment=os.getenv("GYMPLAN_ENV", "production"),
        secret_key=os.getenv("GYMPLAN_SECRET_KEY", ""),
        token_ttl=int(os.getenv("GYMPLAN_TOKEN_TTL", str(7 * 24 * 3600))),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        ai_model=os.getenv("GYMPLAN_AI_MODEL", "gpt-4o-mini"),
        ai_timeout=float(os.getenv("GYMPLAN_AI_TIMEOUT", "60")),
        ai_plans_enabled=_env_flag("GYMPLAN_AI_PLANS"),
        log_level=os.getenv("GYMPLAN_LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str = "INFO") -> None:
    """Install the root logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

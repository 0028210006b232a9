"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to ``default``."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}.")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffPlanner"
    DB_FILENAME = "payoffplanner.db"
    DEFAULT_MAX_MONTHS = 600  # 50 years; runaway-loop guard for the simulation
    DEFAULT_SNAPSHOT_KEY = "payoff-planner-state-v2"
    DEFAULT_SCHEDULE_PREVIEW = 24

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("PAYOFF_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("PAYOFF_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("PAYOFF_DATABASE_URL", self._build_sqlite_url())
        self.MAX_MONTHS = _env_int("PAYOFF_MAX_MONTHS", self.DEFAULT_MAX_MONTHS)
        self.SNAPSHOT_KEY = os.getenv("PAYOFF_SNAPSHOT_KEY", self.DEFAULT_SNAPSHOT_KEY)
        self.SCHEDULE_PREVIEW = _env_int("PAYOFF_SCHEDULE_PREVIEW", self.DEFAULT_SCHEDULE_PREVIEW)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("PAYOFF_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("PAYOFF_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration for the test suite; keeps everything in memory."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        # one shared connection so the in-memory schema survives across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}

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


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Momentum"
    DB_FILENAME = "momentum.db"
    STORAGE_KEY = "habits"
    EXPORT_PREFIX = "momentum_habits"
    EXPORT_RETENTION = 5
    DEFAULT_HABITS = (
        "Drink 8 glasses of water",
        "Move your body for 20 minutes",
        "Read for 15 minutes",
    )

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("MOMENTUM_DEV_MODE", default=True)
        self.SEED_DEFAULTS = _env_bool("MOMENTUM_SEED_DEFAULTS", default=True)
        self.DATABASE_URL = os.getenv("MOMENTUM_DATABASE_URL", self._build_sqlite_url())
        export_dir = os.getenv("MOMENTUM_EXPORT_DIR")
        self.EXPORT_DIR = Path(export_dir).expanduser() if export_dir else self.DATA_DIR / "exports"

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("MOMENTUM_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

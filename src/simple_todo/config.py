# src/simple_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Everything else receives settings by injection (tests build their own).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SIMPLE_TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_dir: Path
    export_dir: Path

    # ---- Persistence ----
    storage_key: str

    # ---- Display formats (fixed at task creation) ----
    date_format: str
    time_format: str

    # ---- Behaviour ----
    confirm_destructive: bool

    @staticmethod
    def from_env(*, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(override=False)

        app_name = _env(_k("APP_NAME"), "Simple Todo App").strip() or "Simple Todo App"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/simple_todo"))
        storage_dir = _env_path(_k("STORAGE_DIR"), data_dir / "storage")
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        date_format = _env(_k("DATE_FORMAT"), "%m/%d/%Y") or "%m/%d/%Y"
        time_format = _env(_k("TIME_FORMAT"), "%I:%M:%S %p") or "%I:%M:%S %p"

        confirm_destructive = _env_bool(_k("CONFIRM_DESTRUCTIVE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_dir=storage_dir,
            export_dir=export_dir,
            storage_key=storage_key,
            date_format=date_format,
            time_format=time_format,
            confirm_destructive=confirm_destructive,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS

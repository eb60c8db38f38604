# src/time_tracer/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required: every value has a local default under data_dir.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TIME_TRACER"

load_dotenv(override=False)


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
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


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
    save_file_path: Path
    cache_file_path: Path

    # ---- Persistence switches ----
    persist_records: bool
    persist_ids: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "time-tracer") or "time-tracer"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/time_tracer"))
        save_file_path = _env_path(_k("SAVE_FILE_PATH"), data_dir / "time_tracer_save")
        cache_file_path = _env_path(_k("CACHE_FILE_PATH"), data_dir / "time_tracer_cache")

        persist_records = _env_bool(_k("PERSIST_RECORDS"), True)
        persist_ids = _env_bool(_k("PERSIST_IDS"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            save_file_path=save_file_path,
            cache_file_path=cache_file_path,
            persist_records=persist_records,
            persist_ids=persist_ids,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS

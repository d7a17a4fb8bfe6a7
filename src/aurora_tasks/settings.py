from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List

BACKENDS = {"memory", "file", "sqlite"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'file' (default), 'sqlite' or 'memory'
    - DATA_DIR: directory holding the file backend record. Default './data'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/aurora.db'
    - STORAGE_KEY: namespaced key the task collection is stored under. Default 'aurora.tasks'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: level name for the aurora_tasks loggers. Default 'INFO'
    """

    persistence_backend: str
    data_dir: str
    sqlite_db_path: str
    storage_key: str
    cors_allow_origins: List[str]
    log_level: int


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value.strip() == "":
        return default
    return value


def _parse_log_level(value: str, default: int = logging.INFO) -> int:
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        # Star will be handled in main via allow_origins=["*"]
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "file").strip().lower()
    if backend not in BACKENDS:
        # Fallback to the file backend so state still survives restarts
        backend = "file"

    return Settings(
        persistence_backend=backend,
        data_dir=_get_env("DATA_DIR", "./data").strip(),
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/aurora.db").strip(),
        storage_key=_get_env("STORAGE_KEY", "aurora.tasks").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
    )

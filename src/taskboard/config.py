# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing touches the database at import time.
- The legacy un-prefixed names (DB_HOST, DB_PORT, DB_NAME, PORT, NODE_ENV)
  are still honoured as fallbacks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
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
    log_dir: Path

    # ---- HTTP ----
    host: str
    port: int

    # ---- Document store ----
    db_host: str
    db_port: int
    db_name: str
    mongo_uri: str | None
    test_mode: bool
    server_selection_timeout_ms: int

    @property
    def database_name(self) -> str:
        """Database actually used; test runs get their own `_test` database."""
        return f"{self.db_name}_test" if self.test_mode else self.db_name

    @property
    def mongo_url(self) -> str:
        if self.mongo_uri:
            return self.mongo_uri
        return f"mongodb://{self.db_host}:{self.db_port}"

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard") or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskboard"))

        host = _env(_k("HOST"), "0.0.0.0")
        port = _parse_int(_first_env(_k("PORT"), "PORT"), 3000)

        db_host = (_first_env(_k("DB_HOST"), "DB_HOST", default="localhost") or "localhost").strip()
        db_port = _parse_int(_first_env(_k("DB_PORT"), "DB_PORT"), 27017)
        db_name = (_first_env(_k("DB_NAME"), "DB_NAME", default="taskboard") or "taskboard").strip()
        mongo_uri = _first_env(_k("MONGO_URI"), default=None)

        # NODE_ENV=test is how the old deployment scripts switch databases.
        test_mode = _env_bool(_k("TEST_MODE"), _env("NODE_ENV").strip().lower() == "test")

        server_selection_timeout_ms = _parse_int(_first_env(_k("DB_TIMEOUT_MS")), 5000)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            host=host,
            port=port,
            db_host=db_host,
            db_port=db_port,
            db_name=db_name,
            mongo_uri=mongo_uri,
            test_mode=test_mode,
            server_selection_timeout_ms=server_selection_timeout_ms,
        )


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings.from_env()

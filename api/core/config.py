"""
Environment-driven settings shared by both services.

Each service calls `load_settings()` with its own defaults (port, base path)
and passes the result to its application factory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote


DEFAULT_MAX_BODY_BYTES = 1024 * 1024


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def normalize_base_path(base_path: str) -> str:
    """
    "" and "/" mean no prefix; otherwise "/prefix" without a trailing slash.
    """
    base_path = (base_path or "").strip().strip("/")
    return f"/{base_path}" if base_path else ""


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    base_path: str = ""
    log_level: str = "INFO"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "postgres"
    database_url: str = ""
    db_pool_max_size: int = 1
    db_command_timeout: float = 30.0

    def dsn(self) -> str:
        """
        Connection string for asyncpg. DATABASE_URL wins over the DB_* parts.
        """
        if self.database_url:
            return self.database_url
        user = quote(self.db_user, safe="")
        password = quote(self.db_password, safe="")
        auth = f"{user}:{password}" if password else user
        return f"postgresql://{auth}@{self.db_host}:{self.db_port}/{quote(self.db_name, safe='')}"


def load_settings(*, default_port: int = 3000, default_base_path: str = "") -> Settings:
    max_body_bytes = _env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)
    pool_size = _env_int("DB_POOL_MAX_SIZE", 1)
    return Settings(
        host=_env_str("HOST", "0.0.0.0") or "0.0.0.0",
        port=_env_int("PORT", default_port),
        base_path=normalize_base_path(_env_str("BASE_PATH", default_base_path)),
        log_level=_env_str("LOG_LEVEL", "INFO") or "INFO",
        max_body_bytes=max_body_bytes if max_body_bytes > 0 else DEFAULT_MAX_BODY_BYTES,
        db_host=_env_str("DB_HOST", "localhost") or "localhost",
        db_port=_env_int("DB_PORT", 5432),
        db_user=_env_str("DB_USER", "postgres") or "postgres",
        db_password=os.environ.get("DB_PASSWORD", ""),
        db_name=_env_str("DB_NAME", "postgres") or "postgres",
        database_url=_env_str("DATABASE_URL", ""),
        db_pool_max_size=pool_size if pool_size > 0 else 1,
        db_command_timeout=_env_float("DB_COMMAND_TIMEOUT", 30.0),
    )

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from constants import (
    DEFAULT_ASSET_BUCKET,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_TABLE,
    DEFAULT_TIMEZONE,
)

_SUPABASE_URL_ENV = "SUPABASE_URL"
_SUPABASE_KEY_ENV = "SUPABASE_ANON_KEY"
_STORE_ENV = "CASA_FRESCA_STORE"
_TABLE_ENV = "CASA_FRESCA_TABLE"
_BUCKET_ENV = "CASA_FRESCA_ASSET_BUCKET"
_DB_PATH_ENV = "CASA_FRESCA_DB_PATH"
_ASSET_DIR_ENV = "CASA_FRESCA_ASSET_DIR"
_TIMEZONE_ENV = "CASA_FRESCA_TIMEZONE"
_HTTP_TIMEOUT_ENV = "CASA_FRESCA_HTTP_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

STORE_BACKENDS = ("supabase", "sqlite")


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    store_backend: str
    table_name: str
    asset_bucket: str
    db_path: Path
    asset_dir: Path
    timezone: str
    http_timeout: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def _read_store_backend(default: str) -> str:
    candidate = _read_str_env(_STORE_ENV, default).lower()
    return candidate if candidate in STORE_BACKENDS else default


def _read_timeout(default: float) -> float:
    value = os.getenv(_HTTP_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    return _read_str_env(_LOG_LEVEL_ENV, default).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        supabase_url=_read_optional_env(_SUPABASE_URL_ENV),
        supabase_key=_read_optional_env(_SUPABASE_KEY_ENV),
        store_backend=_read_store_backend("supabase"),
        table_name=_read_str_env(_TABLE_ENV, DEFAULT_TABLE),
        asset_bucket=_read_str_env(_BUCKET_ENV, DEFAULT_ASSET_BUCKET),
        db_path=Path(_read_str_env(_DB_PATH_ENV, "./data.db")),
        asset_dir=Path(_read_str_env(_ASSET_DIR_ENV, "./assets")),
        timezone=_read_str_env(_TIMEZONE_ENV, DEFAULT_TIMEZONE),
        http_timeout=_read_timeout(DEFAULT_HTTP_TIMEOUT),
        log_level=_read_log_level("INFO"),
    )

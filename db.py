from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

import httpx
import pandas as pd

from settings import Settings

logger = logging.getLogger(__name__)

READING_COLUMNS = ("id", "timestamp", "outdoor_temp", "indoor_temp", "temp_differential")


class StoreError(RuntimeError):
    """Raised when the reading store cannot answer a query."""


class ReadingStore(Protocol):
    def query(self, table: str, order_by: str) -> List[Dict[str, Any]]:
        ...


class AssetStore(Protocol):
    def public_url(self, asset_name: str) -> str:
        ...


class SupabaseStore:
    """Reading and asset store backed by a hosted Supabase project (REST)."""

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        bucket: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.bucket = bucket
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        # Requests use absolute URLs and per-request headers, so an injected
        # client needs no base_url and is not modified.
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def query(self, table: str, order_by: str) -> List[Dict[str, Any]]:
        try:
            response = self._client.get(
                f"{self.url}/rest/v1/{table}",
                params={"select": "*", "order": f"{order_by}.asc"},
                headers=self._headers,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise StoreError(
                f"Query on {table} failed with status {exc.response.status_code}: "
                f"{exc.response.text.strip() or 'no detail provided.'}"
            ) from exc
        except httpx.HTTPError as exc:
            raise StoreError(f"Query on {table} failed: {exc}") from exc
        except ValueError as exc:
            raise StoreError(f"Query on {table} returned invalid JSON.") from exc
        if not isinstance(payload, list):
            raise StoreError(f"Unexpected payload for {table}: expected a list of rows.")
        return payload

    def public_url(self, asset_name: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{asset_name.lstrip('/')}"


class SQLiteReadingStore:
    """Local development store using the same table layout as the hosted one."""

    def __init__(self, db_path: Path, asset_dir: Optional[Path] = None) -> None:
        self.db_path = Path(db_path)
        self.asset_dir = Path(asset_dir) if asset_dir is not None else None

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize_database(self, table: str) -> None:
        _check_identifier(table)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_connection() as conn:
            conn.executescript(f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id                INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp         TEXT NOT NULL,    -- ISO-8601 datetime string
                    outdoor_temp      TEXT NOT NULL,    -- decimal string, Celsius
                    indoor_temp       TEXT NOT NULL,
                    temp_differential TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_{table}_timestamp
                    ON {table}(timestamp);
                """)

    def add_reading(
        self,
        table: str,
        timestamp_iso: str,
        outdoor_temp: Union[str, float],
        indoor_temp: Union[str, float],
        temp_differential: Union[str, float, None] = None,
    ) -> int:
        _check_identifier(table)
        with self._get_connection() as conn:
            cur = conn.execute(
                f"INSERT INTO {table} (timestamp, outdoor_temp, indoor_temp, temp_differential) "
                "VALUES (?, ?, ?, ?)",
                (
                    timestamp_iso,
                    str(outdoor_temp),
                    str(indoor_temp),
                    None if temp_differential is None else str(temp_differential),
                ),
            )
            return int(cur.lastrowid)

    def query(self, table: str, order_by: str) -> List[Dict[str, Any]]:
        _check_identifier(table)
        if order_by not in READING_COLUMNS:
            raise ValueError(f"Unsupported order column: {order_by}")
        if not self.db_path.exists():
            raise StoreError(f"Database file {self.db_path} does not exist.")
        try:
            with self._get_connection() as conn:
                df = pd.read_sql_query(
                    f"SELECT * FROM {table} ORDER BY {order_by} ASC", conn
                )
        except (sqlite3.Error, pd.errors.DatabaseError) as exc:
            raise StoreError(f"Query on {table} failed: {exc}") from exc
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict(orient="records")

    def public_url(self, asset_name: str) -> str:
        if self.asset_dir is None:
            return ""
        path = self.asset_dir / asset_name
        if not path.is_file():
            return ""
        return path.resolve().as_uri()


def _check_identifier(name: str) -> None:
    if not name.replace("_", "").isalnum():
        raise ValueError(f"Unsupported table name: {name}")


Store = Union[SupabaseStore, SQLiteReadingStore]


def build_store(settings: Settings) -> Optional[Store]:
    """Construct the configured store, or None when it cannot be configured."""
    if settings.store_backend == "sqlite":
        return SQLiteReadingStore(settings.db_path, settings.asset_dir)
    if not (settings.supabase_url and settings.supabase_key):
        logger.warning(
            "Supabase credentials missing; dashboard will show no data",
            extra={"reason": "SUPABASE_URL/SUPABASE_ANON_KEY unset"},
        )
        return None
    return SupabaseStore(
        settings.supabase_url,
        settings.supabase_key,
        bucket=settings.asset_bucket,
        timeout=settings.http_timeout,
    )

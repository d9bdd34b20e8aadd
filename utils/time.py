from __future__ import annotations

from typing import Any, Optional

import pandas as pd

# es-ES short month names; strftime("%b") depends on the process locale.
_SPANISH_MONTHS = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
)


def parse_instant(value: Any) -> Optional[pd.Timestamp]:
    """
    Parse an ISO-like datetime string via pandas into a UTC timestamp.
    Naive values are taken as UTC. Returns None if parsing fails.
    """
    if value is None:
        return None
    try:
        ts = pd.to_datetime(value, utc=True)
    except Exception:
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    return ts


def to_local(ts: pd.Timestamp, tz: str) -> pd.Timestamp:
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert(tz)


def format_clock(ts: pd.Timestamp, tz: str) -> str:
    """24h wall-clock time, e.g. '14:05'."""
    return to_local(ts, tz).strftime("%H:%M")


def format_short_datetime(ts: pd.Timestamp, tz: str) -> str:
    """Day, short month and time, e.g. '18 oct, 14:05'."""
    local = to_local(ts, tz)
    return f"{local.day} {_SPANISH_MONTHS[local.month - 1]}, {local.strftime('%H:%M')}"

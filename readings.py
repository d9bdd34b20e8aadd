"""Reading model and the calculations behind the dashboard numbers.

Everything here is pure: no I/O, no Streamlit, no logging. Sequences of
readings are assumed to be sorted ascending by timestamp, which is how the
store returns them; nothing in this module re-sorts.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence

import pandas as pd

from constants import DELTA_LOOKBACK, PLACEHOLDER
from utils.time import parse_instant


class Field(str, Enum):
    indoor = "indoor"
    outdoor = "outdoor"


class Recommendation(str, Enum):
    close = "close"
    open = "open"


class TimeWindow(str, Enum):
    day = "24h"
    week = "7d"

    @property
    def duration(self) -> timedelta:
        return timedelta(hours=24) if self is TimeWindow.day else timedelta(days=7)

    @property
    def label(self) -> str:
        return "24 horas" if self is TimeWindow.day else "7 días"


def parse_temperature(raw: Any) -> float:
    """Parse a decimal-string temperature; nan for anything non-numeric."""
    if isinstance(raw, bool) or raw is None:
        return math.nan
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return math.nan
    else:
        return math.nan
    return value if math.isfinite(value) else math.nan


def format_temperature(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    return f"{value:.1f}"


@dataclass(frozen=True)
class Reading:
    id: str
    timestamp: pd.Timestamp
    outdoor_temp: str
    indoor_temp: str
    temp_differential: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Reading":
        if not isinstance(record, Mapping):
            raise ValueError(f"Expected a row mapping, got {type(record).__name__}")
        ts = parse_instant(record.get("timestamp"))
        if ts is None:
            raise ValueError(f"Unparseable timestamp: {record.get('timestamp')!r}")
        differential = record.get("temp_differential")
        return cls(
            id=str(record.get("id")),
            timestamp=ts,
            outdoor_temp=_as_text(record.get("outdoor_temp")),
            indoor_temp=_as_text(record.get("indoor_temp")),
            temp_differential=None if differential is None else _as_text(differential),
        )

    @property
    def outdoor(self) -> float:
        return parse_temperature(self.outdoor_temp)

    @property
    def indoor(self) -> float:
        return parse_temperature(self.indoor_temp)

    def value(self, field: Field) -> float:
        return self.indoor if Field(field) is Field.indoor else self.outdoor


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def latest_reading(readings: Sequence[Reading]) -> Optional[Reading]:
    return readings[-1] if readings else None


def nearest_reading(
    readings: Sequence[Reading], target: pd.Timestamp
) -> Optional[Reading]:
    """
    Return the reading closest in time to ``target``.

    Binary search over the ascending sequence. On equal distance the earlier
    reading wins, which is what a first-wins linear scan would return. A naive
    ``target`` is taken as UTC, as in ``filter_window``.
    """
    if not readings:
        return None
    target = pd.Timestamp(target)
    if target.tzinfo is None:
        target = target.tz_localize("UTC")
    times = [r.timestamp for r in readings]
    idx = bisect_left(times, target)
    if idx == 0:
        best = 0
    elif idx == len(times):
        best = idx - 1
    else:
        before = target - times[idx - 1]
        after = times[idx] - target
        best = idx if after < before else idx - 1
    # Duplicate timestamps: keep the first occurrence.
    best = bisect_left(times, times[best])
    return readings[best]


def compute_delta(
    readings: Sequence[Reading],
    current_timestamp: pd.Timestamp,
    current_value: Any,
    field: Field,
) -> Optional[float]:
    """
    ``current_value`` minus the ``field`` value of the reading nearest to
    24 hours before ``current_timestamp``.

    None means unavailable: fewer than two readings, or either side is not a
    finite temperature.
    """
    if len(readings) < 2:
        return None
    past = nearest_reading(readings, current_timestamp - DELTA_LOOKBACK)
    if past is None:
        return None
    current = parse_temperature(current_value)
    previous = past.value(field)
    if not (math.isfinite(current) and math.isfinite(previous)):
        return None
    return current - previous


def delta_from_yesterday(readings: Sequence[Reading], field: Field) -> Optional[float]:
    latest = latest_reading(readings)
    if latest is None:
        return None
    return compute_delta(readings, latest.timestamp, latest.value(field), field)


def should_close_windows(indoor: Any, outdoor: Any) -> bool:
    # nan never compares greater, so malformed values leave the windows open.
    return parse_temperature(outdoor) > parse_temperature(indoor)


def recommend(reading: Optional[Reading]) -> Recommendation:
    if reading is None:
        return Recommendation.open
    if should_close_windows(reading.indoor_temp, reading.outdoor_temp):
        return Recommendation.close
    return Recommendation.open


def filter_window(
    readings: Sequence[Reading],
    window: TimeWindow,
    now: Optional[pd.Timestamp] = None,
) -> List[Reading]:
    """Readings no older than ``window`` relative to ``now`` (wall clock by default)."""
    if now is None:
        now = pd.Timestamp.now(tz="UTC")
    elif now.tzinfo is None:
        now = now.tz_localize("UTC")
    cutoff = now - TimeWindow(window).duration
    return [r for r in readings if r.timestamp >= cutoff]

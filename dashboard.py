"""Fetch path and view model for the dashboard page.

The page must never fail in front of the user, so failures are folded into a
``FetchResult`` here and the view model falls back to placeholders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

import pandas as pd

from charts import chart_points
from constants import COOL_COLOR, DEFAULT_TIMEZONE, WARM_COLOR
from readings import (
    Field,
    Reading,
    Recommendation,
    TimeWindow,
    delta_from_yesterday,
    filter_window,
    format_temperature,
    latest_reading,
    recommend,
)
from utils.time import format_clock

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    loaded = "loaded"
    empty = "empty"
    failed = "failed"


@dataclass(frozen=True)
class FetchResult:
    status: FetchStatus
    readings: Tuple[Reading, ...] = ()
    reason: Optional[str] = None


def fetch_readings(store: Any, table: str) -> FetchResult:
    """Query every reading in ``table`` ordered by timestamp; never raises."""
    if store is None:
        logger.error("Reading store not available", extra={"table": table})
        return FetchResult(FetchStatus.failed, reason="store not configured")

    try:
        records = store.query(table, "timestamp")
    except Exception as exc:  # noqa: BLE001 - the page degrades instead of failing
        logger.exception("Error fetching readings", extra={"table": table})
        return FetchResult(FetchStatus.failed, reason=str(exc) or type(exc).__name__)

    readings: List[Reading] = []
    for record in records or []:
        try:
            readings.append(Reading.from_record(record))
        except ValueError as exc:
            # Covers non-mapping rows as well as unparseable timestamps
            logger.warning(
                "Skipping reading",
                extra={"table": table, "reason": str(exc)},
            )

    if not readings:
        logger.info("No readings available", extra={"table": table, "row_count": 0})
        return FetchResult(FetchStatus.empty)

    logger.info(
        "Fetched readings",
        extra={"table": table, "row_count": len(readings)},
    )
    return FetchResult(FetchStatus.loaded, tuple(readings))


def resolve_asset_url(store: Any, asset_name: str) -> str:
    """Public URL for a static asset; empty string leaves a broken image, not a crash."""
    if store is None:
        return ""
    try:
        return store.public_url(asset_name) or ""
    except Exception:  # noqa: BLE001
        logger.exception("Could not resolve asset URL", extra={"asset": asset_name})
        return ""


@dataclass(frozen=True)
class DeltaBadge:
    value: float
    is_increase: bool
    color: str

    @property
    def text(self) -> str:
        # Magnitude first, then direction: "1.3 +" / "0.4 -"
        return f"{abs(self.value):.1f} {'+' if self.is_increase else '-'}"


def delta_badge(delta: Optional[float]) -> Optional[DeltaBadge]:
    if delta is None:
        return None
    is_increase = delta > 0
    return DeltaBadge(delta, is_increase, WARM_COLOR if is_increase else COOL_COLOR)


@dataclass(frozen=True)
class DashboardView:
    status: FetchStatus
    latest: Optional[Reading]
    indoor_text: str
    outdoor_text: str
    indoor_delta: Optional[DeltaBadge]
    outdoor_delta: Optional[DeltaBadge]
    recommendation: Recommendation
    indoor_color: str
    outdoor_color: str
    updated_at: Optional[str]
    points: pd.DataFrame

    @property
    def close_windows(self) -> bool:
        return self.recommendation is Recommendation.close


def build_view(
    result: FetchResult,
    window: TimeWindow,
    *,
    now: Optional[pd.Timestamp] = None,
    tz: str = DEFAULT_TIMEZONE,
) -> DashboardView:
    readings = result.readings
    latest = latest_reading(readings)
    recommendation = recommend(latest)
    close = recommendation is Recommendation.close

    return DashboardView(
        status=result.status,
        latest=latest,
        indoor_text=format_temperature(latest.indoor if latest else None),
        outdoor_text=format_temperature(latest.outdoor if latest else None),
        indoor_delta=delta_badge(delta_from_yesterday(readings, Field.indoor)),
        outdoor_delta=delta_badge(delta_from_yesterday(readings, Field.outdoor)),
        recommendation=recommendation,
        # Warm side is whichever one would heat the house.
        indoor_color=COOL_COLOR if close else WARM_COLOR,
        outdoor_color=WARM_COLOR if close else COOL_COLOR,
        updated_at=format_clock(latest.timestamp, tz) if latest else None,
        points=chart_points(filter_window(readings, window, now), tz),
    )

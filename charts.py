from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from constants import INDOOR_SERIES_COLOR, OUTDOOR_SERIES_COLOR
from readings import Reading
from utils.time import format_short_datetime, to_local

POINT_COLUMNS = ["timestamp", "time_label", "outdoor", "indoor"]


def chart_points(readings: Sequence[Reading], tz: str) -> pd.DataFrame:
    """One row per reading; malformed temperatures become NaN gaps in the lines."""
    rows = [
        {
            "timestamp": to_local(r.timestamp, tz),
            "time_label": format_short_datetime(r.timestamp, tz),
            "outdoor": r.outdoor,
            "indoor": r.indoor,
        }
        for r in readings
    ]
    return pd.DataFrame(rows, columns=POINT_COLUMNS)


def build_temperature_figure(points: pd.DataFrame, *, height: int = 256) -> go.Figure:
    fig = go.Figure()

    if not points.empty:
        # Full date label for the unified hover; the axis itself stays sparse.
        labels = points["time_label"].tolist()
        for name, column, color in (
            ("Outdoor", "outdoor", OUTDOOR_SERIES_COLOR),
            ("Indoor", "indoor", INDOOR_SERIES_COLOR),
        ):
            fig.add_trace(
                go.Scatter(
                    x=points["timestamp"],
                    y=points[column],
                    mode="lines",
                    name=name,
                    line=dict(color=color, width=2, shape="spline"),
                    customdata=labels,
                    hovertemplate="%{y:.1f}°C<extra></extra>",
                )
            )
        # Only the most recent point gets an x-axis label
        last = points["timestamp"].iloc[-1]
        fig.update_xaxes(tickvals=[last], ticktext=[last.strftime("%H:%M")])
        fig.update_traces(
            selector=dict(name="Outdoor"),
            hovertemplate="%{customdata}<br>%{y:.1f}°C<extra></extra>",
        )

    fig.update_layout(
        template="simple_white",
        height=height,
        margin=dict(l=5, r=15, t=5, b=5),
        showlegend=False,
        hovermode="x unified",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(size=10),
    )
    fig.update_xaxes(showgrid=False, showline=False, ticks="", showspikes=False)
    fig.update_yaxes(
        showgrid=True,
        gridcolor="#e5e7eb",
        showline=False,
        ticks="",
        ticksuffix="°C",
        tickformat=".0f",
    )
    return fig


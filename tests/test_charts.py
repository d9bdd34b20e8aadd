import math

import pandas as pd
import plotly.graph_objects as go

from charts import build_temperature_figure, chart_points
from conftest import make_reading


def make_readings():
    return [
        make_reading("2026-10-18T10:00:00Z", outdoor="12.0", indoor="20.5"),
        make_reading("2026-10-18T11:00:00Z", outdoor="", indoor="20.7"),
        make_reading("2026-10-18T12:05:00Z", outdoor="14.5", indoor="21.0"),
    ]


def test_chart_points_columns_and_labels():
    points = chart_points(make_readings(), "Europe/Madrid")
    assert list(points.columns) == ["timestamp", "time_label", "outdoor", "indoor"]
    # Madrid is UTC+2 in October before the DST switch
    assert points["time_label"].tolist() == ["18 oct, 12:00", "18 oct, 13:00", "18 oct, 14:05"]
    assert math.isnan(points["outdoor"].iloc[1])
    assert points["indoor"].tolist() == [20.5, 20.7, 21.0]


def test_chart_points_empty():
    points = chart_points([], "UTC")
    assert points.empty
    assert list(points.columns) == ["timestamp", "time_label", "outdoor", "indoor"]


def test_build_temperature_figure_basic_properties():
    fig = build_temperature_figure(chart_points(make_readings(), "UTC"), height=300)
    assert isinstance(fig, go.Figure)

    names = [t.name for t in fig.data]
    assert names == ["Outdoor", "Indoor"]
    colors = [t.line.color for t in fig.data]
    assert colors == ["#C11818", "#589684"]

    assert fig.layout.height == 300
    assert fig.layout.showlegend is False
    assert fig.layout.yaxis.ticksuffix == "°C"

    # Only the last point carries an x-axis label
    assert list(fig.layout.xaxis.ticktext) == ["12:05"]


def test_build_temperature_figure_empty_frame():
    fig = build_temperature_figure(pd.DataFrame(columns=["timestamp", "time_label", "outdoor", "indoor"]))
    assert len(fig.data) == 0
    assert fig.layout.yaxis.ticksuffix == "°C"

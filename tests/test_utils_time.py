import pandas as pd

from utils.time import format_clock, format_short_datetime, parse_instant, to_local


def test_parse_instant_normalizes_to_utc():
    assert parse_instant("2026-02-01T13:45:59+01:00") == pd.Timestamp("2026-02-01T12:45:59Z")
    assert parse_instant("2026-02-01 13:45").tzinfo is not None
    assert parse_instant("2026-02-01 13:45") == pd.Timestamp("2026-02-01T13:45Z")


def test_parse_instant_unparseable_returns_none():
    assert parse_instant("n/a") is None
    assert parse_instant("") is None
    assert parse_instant(None) is None


def test_format_clock_uses_display_timezone():
    ts = pd.Timestamp("2026-01-15T22:30:00Z")
    assert format_clock(ts, "UTC") == "22:30"
    assert format_clock(ts, "Europe/Madrid") == "23:30"


def test_format_short_datetime_spanish_month():
    ts = pd.Timestamp("2026-12-31T23:30:00Z")
    assert format_short_datetime(ts, "Europe/Madrid") == "1 ene, 00:30"
    assert format_short_datetime(ts, "UTC") == "31 dic, 23:30"


def test_to_local_treats_naive_as_utc():
    assert to_local(pd.Timestamp("2026-07-01T10:00"), "Europe/Madrid").hour == 12

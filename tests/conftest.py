import sys
from pathlib import Path

# Ensure the repo root (parent of this file's directory) is importable when running pytest
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import pandas as pd
import pytest

from readings import Reading


def make_reading(timestamp, outdoor="20.0", indoor="22.0", rid=None) -> Reading:
    ts = pd.Timestamp(timestamp)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return Reading(
        id=str(rid if rid is not None else ts.isoformat()),
        timestamp=ts,
        outdoor_temp=outdoor,
        indoor_temp=indoor,
    )


class FakeStore:
    """In-memory stand-in for the hosted store."""

    def __init__(self, rows=None, error=None, assets=None):
        self.rows = list(rows or [])
        self.error = error
        self.assets = dict(assets or {})
        self.queries = []

    def query(self, table, order_by):
        self.queries.append((table, order_by))
        if self.error is not None:
            raise self.error
        return list(self.rows)

    def public_url(self, asset_name):
        return self.assets[asset_name]


@pytest.fixture()
def fake_store():
    return FakeStore


@pytest.fixture(autouse=True)
def clear_settings_cache():
    from settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

from __future__ import annotations

from datetime import timedelta

# Lookback used for the "than yesterday" comparison.
DELTA_LOOKBACK: timedelta = timedelta(hours=24)

# Shown wherever a temperature is absent or not a finite number.
PLACEHOLDER: str = "--"

DEFAULT_TABLE: str = "casa_fresca_readings"
DEFAULT_ASSET_BUCKET: str = "casa-fresca-assets"
DEFAULT_TIMEZONE: str = "Europe/Madrid"
DEFAULT_HTTP_TIMEOUT: float = 10.0

# Palette
WARM_COLOR: str = "#DD9378"
COOL_COLOR: str = "#7FB9D8"
OUTDOOR_SERIES_COLOR: str = "#C11818"
INDOOR_SERIES_COLOR: str = "#589684"
FOOTER_COLOR: str = "#bbb"

BANNER_ASSET: str = "top_new.png"
WINDOWS_CLOSED_ASSET: str = "windows_closed.png"
WINDOWS_OPEN_ASSET: str = "windows_open.png"
MASCOT_ASSET: str = "cat.png"

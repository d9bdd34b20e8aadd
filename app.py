from __future__ import annotations

from typing import Any, Optional

import streamlit as st

from charts import build_temperature_figure
from constants import (
    BANNER_ASSET,
    FOOTER_COLOR,
    MASCOT_ASSET,
    WINDOWS_CLOSED_ASSET,
    WINDOWS_OPEN_ASSET,
)
from dashboard import (
    DashboardView,
    DeltaBadge,
    FetchResult,
    build_view,
    fetch_readings,
    resolve_asset_url,
)
from db import build_store
from logging_config import configure_logging
from readings import TimeWindow
from settings import get_settings


def _get_store() -> Any:
    # One store per browser session; the toggle reruns must not rebuild it.
    if "store" not in st.session_state:
        st.session_state["store"] = build_store(get_settings())
    return st.session_state["store"]


def _get_readings(store: Any) -> FetchResult:
    if "fetch_result" not in st.session_state:
        with st.spinner("Refrescando CASA FRESCA..."):
            st.session_state["fetch_result"] = fetch_readings(store, get_settings().table_name)
    return st.session_state["fetch_result"]


def _image(store: Any, asset_name: str, **kwargs: Any) -> None:
    url = resolve_asset_url(store, asset_name)
    if url:
        st.image(url, **kwargs)


def _delta_html(delta: Optional[DeltaBadge]) -> str:
    if delta is None:
        return "&nbsp;"
    return f"<span style='color:{delta.color}'>{delta.text}</span> que ayer"


def _render_readings(view: DashboardView, store: Any) -> None:
    col_in, col_icon, col_out = st.columns([2, 1, 2], vertical_alignment="center")
    with col_in:
        st.markdown(
            "<div style='text-align:center'>"
            "<div style='font-size:0.875rem'>DENTRO</div>"
            f"<div style='font-size:1.9rem;font-weight:700;color:{view.indoor_color}'>"
            f"{view.indoor_text}&nbsp;°C</div>"
            f"<div style='font-size:0.875rem;color:#6b7280'>{_delta_html(view.indoor_delta)}</div>"
            "</div>",
            unsafe_allow_html=True,
        )
    with col_icon:
        icon = WINDOWS_CLOSED_ASSET if view.close_windows else WINDOWS_OPEN_ASSET
        caption = "Close windows" if view.close_windows else "Open windows"
        _image(store, icon, caption=caption, width=80)
    with col_out:
        st.markdown(
            "<div style='text-align:center'>"
            "<div style='font-size:0.875rem'>FUERA</div>"
            f"<div style='font-size:1.9rem;font-weight:700;color:{view.outdoor_color}'>"
            f"{view.outdoor_text}&nbsp;°C</div>"
            f"<div style='font-size:0.875rem;color:#6b7280'>{_delta_html(view.outdoor_delta)}</div>"
            "</div>",
            unsafe_allow_html=True,
        )


def _render_mascot(store: Any) -> None:
    _, col_cat, _ = st.columns([1, 2, 1])
    with col_cat:
        _image(store, MASCOT_ASSET, use_container_width=True)
        # st.image has no click handler, so the mascot speaks through a button below it
        if st.button("🐱", key="mascot", use_container_width=True):
            st.toast("¡Miau!")


def main() -> None:
    st.set_page_config(page_title="Casa Fresca", page_icon="🌡️", layout="centered")
    configure_logging()
    settings = get_settings()

    store = _get_store()
    result = _get_readings(store)

    st.session_state.setdefault("time_window", TimeWindow.day.value)
    window = TimeWindow(st.session_state["time_window"])
    view = build_view(result, window, tz=settings.timezone)

    _image(store, BANNER_ASSET, use_container_width=True)
    _render_readings(view, store)

    st.plotly_chart(
        build_temperature_figure(view.points),
        use_container_width=True,
        config={"displayModeBar": False, "scrollZoom": False},
    )
    if view.updated_at:
        st.markdown(
            f"<p style='text-align:center;color:#6b7280;font-size:0.875rem'>"
            f"actualizado a las {view.updated_at}</p>",
            unsafe_allow_html=True,
        )

    st.radio(
        "Rango",
        options=[TimeWindow.week.value, TimeWindow.day.value],
        format_func=lambda value: TimeWindow(value).label,
        key="time_window",
        horizontal=True,
        label_visibility="collapsed",
    )

    st.markdown(
        f"<p style='text-align:center;font-size:0.875rem;color:{FOOTER_COLOR}'>"
        "Casa Fresca - León, España<br>"
        "Sistema de gestión de temperatura para dormir bien</p>",
        unsafe_allow_html=True,
    )
    _render_mascot(store)


if __name__ == "__main__":
    main()

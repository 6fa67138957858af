"""Shared UI components for the Weather Live dashboard."""

import logging

import streamlit as st

from dashboard.api_client import APIError
from dashboard.controller import DashboardController
from dashboard.runtime import LoopRunner
from dashboard.styles import accent_for_temperature, inject_css, theme_for_icon

logger = logging.getLogger(__name__)

ICONS = {
    "01d": "☀️",
    "01n": "🌙",
    "02d": "⛅",
    "02n": "☁️",
    "03d": "☁️",
    "04d": "☁️",
    "09d": "🌧️",
    "10d": "🌦️",
    "11d": "⛈️",
    "13d": "❄️",
    "50d": "🌫️",
}

NOTIFICATION_ICONS = {"success": "✅", "info": "ℹ️", "warning": "⚠️", "error": "❌"}


@st.cache_resource
def get_runner() -> LoopRunner:
    """One background event loop per server process."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    return LoopRunner()


def get_controller() -> DashboardController:
    """Controller for this browser session, started on first use."""
    if "controller" not in st.session_state:
        runner = get_runner()
        controller = DashboardController.create()
        st.session_state.controller = controller
        runner.run(controller.start())
    return st.session_state.controller


def run(coro):
    """Run a controller coroutine on the background loop."""
    return get_runner().run(coro)


def weather_icon(icon: str | None) -> str:
    if not icon:
        return "🌡️"
    return ICONS.get(icon) or ICONS.get(f"{icon[:2]}d", "🌡️")


def apply_theme(controller: DashboardController) -> None:
    """Inject CSS, themed by current conditions when weather backgrounds are on."""
    weather = controller.state.weather
    if not controller.state.settings.weather_backgrounds or not weather:
        inject_css()
        return
    condition = (weather.get("weather") or [{}])[0]
    inject_css(
        theme=theme_for_icon(condition.get("icon")),
        accent=accent_for_temperature(weather["main"]["temp"]),
    )


def render_notifications(controller: DashboardController) -> None:
    for note in controller.state.drain_notifications():
        st.toast(note.message, icon=NOTIFICATION_ICONS.get(note.level))


def render_sidebar(controller: DashboardController) -> None:
    """Render the common sidebar with branding, recent searches and status."""
    with st.sidebar:
        st.markdown("### 🌤️ Weather Live")
        st.caption("Live weather, air quality and 5-day outlook")

        st.divider()

        recent = controller.state.recent.items
        if recent:
            st.markdown("**Recent searches**")
            for city in recent:
                if st.button(city, key=f"recent_{city}", use_container_width=True):
                    run(controller.load_weather(city))
                    st.rerun()

        st.divider()

        if controller.state.last_updated:
            st.caption(f"Last updated {controller.state.last_updated:%H:%M:%S}")
        if controller.refresh_timer.running:
            st.caption(f"Auto-refresh every {controller.refresh_timer.interval / 60:.0f} min")

        with st.expander("Service status"):
            try:
                health = run(controller.api.get_health())
            except APIError as e:
                st.error(f"Gateway unreachable: {e.error}")
            else:
                st.caption(f"Provider: {health.get('provider', 'unknown')}")
                for api, status in health.get("apis", {}).items():
                    st.caption(f"{api}: {status}")

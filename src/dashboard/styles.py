"""Shared styles and weather themes for the Weather Live dashboard."""

import streamlit as st

# Base palette; the primary color is replaced by the temperature accent
COLORS = {
    "primary": "#38bdf8",
    "surface": "#172033",
    "text": "#e2e8f0",
    "text_muted": "#8b9bb4",
    "card": "rgba(23, 32, 51, 0.78)",
}

# Page gradient per weather theme
THEMES = {
    "sunny": ("#0f172a", "#1e293b", "#374151"),
    "cloudy": ("#111827", "#1f2937", "#374151"),
    "rainy": ("#0c1222", "#1e293b", "#334155"),
    "stormy": ("#000000", "#1f2937", "#374151"),
    "snowy": ("#1e293b", "#334155", "#475569"),
    "night": ("#000011", "#1e1b4b", "#312e81"),
}


def theme_for_icon(icon: str | None) -> str:
    """Weather theme for an icon code such as ``01n`` or ``10d``."""
    if not icon:
        return "sunny"
    code = icon[:2]
    if code == "01":
        return "night" if icon.endswith("n") else "sunny"
    if code in ("02", "03", "04", "50"):
        return "cloudy"
    if code in ("09", "10"):
        return "rainy"
    if code == "11":
        return "stormy"
    if code == "13":
        return "snowy"
    return "sunny"


def accent_for_temperature(celsius: float) -> str:
    """Blue for cold through red for hot."""
    hue = max(180, min(360, 240 - celsius * 2))
    return f"hsl({hue:.0f}, 70%, 60%)"


def get_global_css(theme: str | None = None, accent: str | None = None) -> str:
    """Generate global CSS, optionally with a weather-themed background."""
    bg_css = ""
    if theme in THEMES:
        start, middle, end = THEMES[theme]
        bg_css = f"""
.stApp {{
    background: linear-gradient(135deg, {start} 0%, {middle} 50%, {end} 100%);
    background-attachment: fixed;
}}
"""
    accent = accent or COLORS["primary"]

    return f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap');

:root {{
    --primary: {accent};
    --surface: {COLORS["surface"]};
    --text: {COLORS["text"]};
    --text-muted: {COLORS["text_muted"]};
}}

.stApp {{
    font-family: "Inter", system-ui, sans-serif;
}}

{bg_css}

.stApp p, .stApp label {{
    color: var(--text) !important;
}}

h1, h2, h3 {{
    letter-spacing: -0.01em;
}}

[data-testid="stVerticalBlock"] > div[data-testid="stVerticalBlockBorderWrapper"] {{
    background: {COLORS["card"]} !important;
    border: 1px solid var(--primary) !important;
    border-radius: 16px !important;
    backdrop-filter: blur(12px);
}}

.hero-temp {{
    font-size: 4rem;
    font-weight: 700;
    line-height: 1;
    color: var(--primary) !important;
}}

.hero-caption {{
    font-size: 1.1rem;
    color: var(--text-muted) !important;
}}

.day-card {{
    text-align: center;
    padding: 0.75rem 0.5rem;
    border-radius: 12px;
    background: {COLORS["card"]};
}}

.day-card.current {{
    border: 1px solid var(--primary);
}}

[data-testid="stMetricValue"] {{
    color: var(--primary) !important;
}}

[data-testid="stMetricLabel"] p {{
    color: var(--text-muted) !important;
    text-transform: uppercase;
    font-size: 0.75rem;
}}

section[data-testid="stSidebar"] {{
    background: var(--surface) !important;
}}
</style>
"""


def inject_css(theme: str | None = None, accent: str | None = None) -> None:
    """Inject global CSS into the Streamlit app."""
    st.markdown(get_global_css(theme, accent), unsafe_allow_html=True)

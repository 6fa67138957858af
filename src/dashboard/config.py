"""Frontend configuration."""

import os
from pathlib import Path

# API configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001")
API_PREFIX = "/api"
API_TIMEOUT = 15.0

# Browser-storage equivalent for settings, recent searches and location permission
STORAGE_PATH = Path(
    os.getenv("DASHBOARD_STORAGE_PATH", str(Path.home() / ".weather_live" / "storage.json"))
)

# Fallback location when geolocation is unavailable or denied
DEFAULT_CITY = "Delhi"

# Timings (seconds)
AIR_QUALITY_TIMEOUT = 8.0
RESIZE_DEBOUNCE = 0.3
CHART_RETRY_DELAY = 0.1
CHART_MAX_RETRIES = 20
UPDATE_POLL_INTERVAL = 2.0

# Chart container (pixels)
CHART_WIDTH = 640
CHART_HEIGHT = 220
CHART_PADDING = 20
CHART_SIZES = {"Compact": 480, "Standard": CHART_WIDTH, "Wide": 900}

MAX_NOTIFICATIONS = 20

POPULAR_CITIES = [
    "New York",
    "London",
    "Tokyo",
    "Paris",
    "Delhi",
    "Sydney",
    "Mumbai",
    "Dubai",
    "Los Angeles",
    "Chicago",
    "Toronto",
    "Berlin",
    "Madrid",
    "Rome",
    "Bangkok",
    "Singapore",
    "Hong Kong",
    "Seoul",
    "Moscow",
    "Cairo",
    "Istanbul",
    "Amsterdam",
]

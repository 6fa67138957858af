"""Dashboard application state and its persisted parts.

``AppState`` owns separate sub-structs for settings, recent searches, the
location permission flag and the chart. Each persisted part has its own
load/save boundary against a ``LocalStore`` key.
"""

import json
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dashboard.chart import ChartState
from dashboard.config import DEFAULT_CITY, MAX_NOTIFICATIONS, STORAGE_PATH

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
RECENT_SEARCHES_KEY = "recent_searches"
LOCATION_KEY = "use_current_location"

SCHEMA_VERSION = 2
MAX_RECENT_SEARCHES = 5

# Version 1 stored the browser dashboard's camelCase keys
LEGACY_SETTING_KEYS = {
    "temperatureUnit": "temperature_unit",
    "autoRefresh": "auto_refresh",
    "refreshInterval": "refresh_interval",
    "weatherBackgrounds": "weather_backgrounds",
    "notifications": "notifications",
    "keyboardShortcuts": "keyboard_shortcuts",
    "autocomplete": "autocomplete",
    "dataSource": "data_source",
}


class LocalStore:
    """Key/value JSON file standing in for browser local storage."""

    def __init__(self, path: Path = STORAGE_PATH) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)


class Settings(BaseModel):
    """User preferences."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    schema_version: int = SCHEMA_VERSION
    temperature_unit: Literal["C", "F"] = "C"
    auto_refresh: bool = True
    refresh_interval: int = Field(default=600_000, ge=0, description="Milliseconds")
    weather_backgrounds: bool = True
    notifications: bool = True
    keyboard_shortcuts: bool = True
    autocomplete: bool = True
    data_source: Literal["auto", "local"] = "auto"


def migrate_settings(stored: dict[str, Any]) -> dict[str, Any]:
    """Bring a stored settings dict up to the current schema version."""
    try:
        version = int(stored.get("schema_version", 1))
    except (TypeError, ValueError):
        logger.warning(f"Unreadable settings schema version {stored.get('schema_version')!r}, assuming 1")
        version = 1
    if version < 2:
        stored = {LEGACY_SETTING_KEYS.get(key, key): value for key, value in stored.items()}
        logger.info("Migrated stored settings from schema version 1")
    stored["schema_version"] = SCHEMA_VERSION
    return stored


class SettingsStore:
    """Loads settings merged over defaults and persists every change."""

    def __init__(self, store: LocalStore) -> None:
        self.store = store

    def load(self) -> Settings:
        stored = self.store.get(SETTINGS_KEY)
        if not isinstance(stored, dict):
            return Settings()

        values = {k: v for k, v in migrate_settings(dict(stored)).items() if k in Settings.model_fields}
        try:
            return Settings(**values)
        except ValidationError as e:
            invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
            logger.warning(f"Dropping invalid stored settings: {sorted(invalid)}")
            return Settings(**{k: v for k, v in values.items() if k not in invalid})

    def save(self, settings: Settings) -> None:
        self.store.set(SETTINGS_KEY, settings.model_dump())


@dataclass
class RecentSearches:
    """Most-recent-first list of searched places, without duplicates."""

    items: list[str] = field(default_factory=list)
    limit: int = MAX_RECENT_SEARCHES

    def add(self, city: str) -> None:
        self.items = [city, *(s for s in self.items if s != city)][: self.limit]

    @classmethod
    def load(cls, store: LocalStore) -> "RecentSearches":
        stored = store.get(RECENT_SEARCHES_KEY, [])
        recent = cls()
        if isinstance(stored, list):
            # Oldest first so the stored order survives dedupe and the cap
            for city in reversed(stored):
                if isinstance(city, str) and city:
                    recent.add(city)
        return recent

    def save(self, store: LocalStore) -> None:
        store.set(RECENT_SEARCHES_KEY, self.items)


@dataclass
class LocationPreference:
    """Remembered geolocation permission: None until the user has decided."""

    allowed: bool | None = None

    @classmethod
    def load(cls, store: LocalStore) -> "LocationPreference":
        value = store.get(LOCATION_KEY)
        return cls(allowed=value if isinstance(value, bool) else None)

    def save(self, store: LocalStore) -> None:
        if self.allowed is None:
            store.remove(LOCATION_KEY)
        else:
            store.set(LOCATION_KEY, self.allowed)


@dataclass
class Notification:
    message: str
    level: Literal["success", "info", "warning", "error"] = "info"
    created: datetime = field(default_factory=datetime.now)


@dataclass
class AppState:
    """Everything the dashboard renders."""

    settings: Settings = field(default_factory=Settings)
    recent: RecentSearches = field(default_factory=RecentSearches)
    location: LocationPreference = field(default_factory=LocationPreference)
    chart: ChartState = field(default_factory=ChartState)
    current_location: str = DEFAULT_CITY
    # Query for follow-up fetches: the resolved "lat,lng" once a place is loaded
    location_query: str | None = None
    weather: dict | None = None
    air_quality: dict | None = None
    air_quality_status: Literal["idle", "loading", "ready", "unavailable"] = "idle"
    notifications: deque[Notification] = field(default_factory=lambda: deque(maxlen=MAX_NOTIFICATIONS))
    is_loading: bool = False
    generation: int = 0
    last_updated: datetime | None = None

    @classmethod
    def load(cls, store: LocalStore) -> "AppState":
        """Restore persisted parts; everything else starts empty."""
        recent = RecentSearches.load(store)
        return cls(
            settings=SettingsStore(store).load(),
            recent=recent,
            location=LocationPreference.load(store),
            current_location=recent.items[0] if recent.items else DEFAULT_CITY,
        )

    @property
    def refresh_target(self) -> str:
        return self.location_query or self.current_location

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def is_stale(self, generation: int) -> bool:
        return generation != self.generation

    @property
    def view_stamp(self) -> tuple:
        """Summary of what the page shows; differs after any background update."""
        return (
            self.generation,
            len(self.notifications),
            self.last_updated,
            self.air_quality_status,
            self.chart.status,
            self.chart.layout,
        )

    def notify(self, message: str, level: Literal["success", "info", "warning", "error"] = "info") -> None:
        """Queue a notification; only errors are shown when notifications are off."""
        if level != "error" and not self.settings.notifications:
            return
        self.notifications.append(Notification(message, level))

    def drain_notifications(self) -> list[Notification]:
        pending = list(self.notifications)
        self.notifications.clear()
        return pending

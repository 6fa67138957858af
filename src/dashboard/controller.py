"""Dashboard controller: load orchestration, settings and chart control."""

import asyncio
import logging
from datetime import datetime
from typing import Any

from dashboard.api_client import APIClient, APIError
from dashboard.chart import ChartDataError, ChartNotReady, ChartRenderer, ChartStatus, Metric
from dashboard.config import AIR_QUALITY_TIMEOUT, CHART_HEIGHT, POPULAR_CITIES
from dashboard.scheduling import AutoRefreshTimer, first_settled
from dashboard.state import AppState, LocalStore, Settings, SettingsStore
from dashboard.units import unit_name

logger = logging.getLogger(__name__)

MAX_RECENT_SUGGESTIONS = 3
MAX_POPULAR_SUGGESTIONS = 5
MAX_SUGGESTIONS = 6
REMOTE_SEARCH_MIN_LENGTH = 3


def match_cities(query: str, recent: list[str], popular: list[str] = POPULAR_CITIES) -> list[str]:
    """Recent searches first, then popular cities, case-insensitive substring match."""
    needle = query.strip().lower()
    if not needle:
        return []
    recent_hits = [city for city in recent if needle in city.lower()][:MAX_RECENT_SUGGESTIONS]
    popular_hits = [
        city for city in popular if needle in city.lower() and city not in recent_hits
    ][:MAX_POPULAR_SUGGESTIONS]
    return (recent_hits + popular_hits)[:MAX_SUGGESTIONS]


def coordinate_query(snapshot: dict) -> str | None:
    """``"lat,lng"`` for the place a snapshot was resolved to, if it has coordinates."""
    coord = snapshot.get("coord") or {}
    lat, lng = coord.get("lat"), coord.get("lng")
    if lat is None or lng is None:
        return None
    return f"{lat},{lng}"


class DashboardController:
    """Owns the application state and every action the UI can trigger.

    All coroutines must run on one event loop; the air-quality task, the
    auto-refresh timer and the resize debouncer are scheduled on it.
    """

    def __init__(
        self,
        api: APIClient,
        state: AppState,
        store: LocalStore,
        renderer: ChartRenderer | None = None,
        air_quality_timeout: float = AIR_QUALITY_TIMEOUT,
    ) -> None:
        self.api = api
        self.state = state
        self.store = store
        self.settings_store = SettingsStore(store)
        self.renderer = renderer or ChartRenderer(state.chart)
        self.renderer.unit = state.settings.temperature_unit
        self.air_quality_timeout = air_quality_timeout
        self.refresh_timer = AutoRefreshTimer(self.refresh)
        self._air_quality_task: asyncio.Task | None = None

    @classmethod
    def create(cls, api: APIClient | None = None, store: LocalStore | None = None) -> "DashboardController":
        store = store or LocalStore()
        return cls(api or APIClient(), AppState.load(store), store)

    async def start(self) -> None:
        """Apply timers from settings and load the last known city."""
        self.apply_settings()
        await self.load_weather(self.state.current_location)

    async def shutdown(self) -> None:
        self.refresh_timer.cancel()
        if self._air_quality_task is not None:
            self._air_quality_task.cancel()
        await self.api.aclose()

    # ==================== LOADING ====================

    async def load_weather(self, city: str, refresh: bool = False) -> bool:
        """Load conditions, chart and air quality for a place name.

        Ignored while another load is in flight. Returns True when the
        snapshot was applied.
        """
        city = city.strip()
        if not city:
            self.state.notify("Please enter a city name", "warning")
            return False
        if self.state.is_loading:
            logger.info(f"Ignoring load for {city}: another load is in flight")
            return False

        self.state.is_loading = True
        generation = self.state.next_generation()
        try:
            snapshot = await self.api.get_weather(city)
            if self.state.is_stale(generation):
                logger.info(f"Discarding stale weather response for {city}")
                return False
            await self._apply_snapshot(snapshot, city, generation, refresh)
        except APIError as e:
            logger.warning(f"Weather load for {city} failed: {e.error}")
            self.state.notify(f"{e.error}: {city}" if e.status_code == 404 else e.error, "error")
            return False
        finally:
            self.state.is_loading = False

        if not refresh:
            self.state.notify(f"Weather updated for {self.state.current_location}", "success")
        return True

    async def load_by_coordinates(self, lat: float, lng: float) -> bool:
        """Load weather for a coordinate pair, falling back to the last known city."""
        if self.state.is_loading:
            logger.info("Ignoring location load: another load is in flight")
            return False

        self.state.is_loading = True
        generation = self.state.next_generation()
        try:
            snapshot = await self.api.get_weather_by_coords(lat, lng)
            if self.state.is_stale(generation):
                return False
            await self._apply_snapshot(snapshot, f"{lat},{lng}", generation)
        except APIError as e:
            logger.warning(f"Weather load for ({lat}, {lng}) failed: {e.error}")
            self.state.notify(f"Could not load weather for your location: {e.error}", "error")
        else:
            self.state.notify(f"Showing weather for {self.state.current_location}", "success")
            return True
        finally:
            self.state.is_loading = False

        return await self.load_weather(self.state.refresh_target)

    async def refresh(self) -> bool:
        if self.state.is_loading:
            return False
        logger.info(f"Refreshing weather for {self.state.current_location}")
        return await self.load_weather(self.state.refresh_target, refresh=True)

    async def _apply_snapshot(self, snapshot: dict, query: str, generation: int, refresh: bool = False) -> None:
        """Show a snapshot and fetch chart and air quality for the same place.

        Follow-up requests use the resolved coordinates; the display name
        only labels the place.
        """
        state = self.state
        name = snapshot.get("name") or query
        query = coordinate_query(snapshot) or query
        state.weather = snapshot
        state.current_location = name
        state.location_query = query
        state.last_updated = datetime.now()
        state.recent.add(name)
        state.recent.save(self.store)

        self._start_air_quality(query, generation)
        await self.load_chart(query, generation, refresh)

    # ==================== AIR QUALITY ====================

    def _start_air_quality(self, city: str, generation: int) -> None:
        if self._air_quality_task is not None and not self._air_quality_task.done():
            self._air_quality_task.cancel()
        self.state.air_quality_status = "loading"
        self._air_quality_task = asyncio.create_task(self._load_air_quality(city, generation))

    async def _load_air_quality(self, city: str, generation: int) -> None:
        try:
            sample = await first_settled(self.api.get_air_quality(city), self.air_quality_timeout)
        except (APIError, TimeoutError) as e:
            logger.warning(f"Air quality unavailable for {city}: {e}")
            sample = None

        if self.state.is_stale(generation):
            return
        self.state.air_quality = sample
        self.state.air_quality_status = "ready" if sample else "unavailable"

    async def wait_for_air_quality(self) -> None:
        if self._air_quality_task is not None:
            await asyncio.gather(self._air_quality_task, return_exceptions=True)

    # ==================== CHART ====================

    async def load_chart(self, city: str, generation: int, refresh: bool = False) -> None:
        chart = self.state.chart
        chart.begin_load(refresh)
        if not refresh:
            chart.days = []
        try:
            data = await self.api.get_weather_chart(city)
        except APIError as e:
            logger.warning(f"Chart data for {city} failed: {e.error}")
            if not self.state.is_stale(generation):
                chart.fail(f"Failed to load chart data: {e.error}")
            return

        if self.state.is_stale(generation):
            return
        chart.city = data.get("city", city)
        chart.days = data.get("combined", [])
        await self._draw()

    async def switch_metric(self, metric: Metric | str) -> None:
        """Show another metric from the already fetched days."""
        chart = self.state.chart
        chart.metric = Metric(metric)
        if chart.status not in (ChartStatus.RENDERED, ChartStatus.ERROR) or not chart.days:
            return
        chart.begin_load()
        await self._draw()

    async def resize_chart(self, width: float, height: float = CHART_HEIGHT) -> None:
        """Measure the chart container at a new size and redraw once resizing settles."""
        self.renderer.measure = lambda: (width, height)
        self.renderer.on_resize()

    async def _draw(self) -> None:
        try:
            await self.renderer.draw()
        except (ChartDataError, ChartNotReady) as e:
            logger.warning(f"Chart not drawn: {e}")
            self.state.chart.fail(str(e))

    # ==================== SEARCH ====================

    def search_suggestions(self, query: str) -> list[str]:
        if not self.state.settings.autocomplete:
            return []
        return match_cities(query, self.state.recent.items)

    async def suggest(self, query: str) -> list[str]:
        """Local suggestions topped up with gateway city search."""
        suggestions = self.search_suggestions(query)
        settings = self.state.settings
        if (
            not settings.autocomplete
            or settings.data_source == "local"
            or len(query.strip()) < REMOTE_SEARCH_MIN_LENGTH
            or len(suggestions) >= MAX_SUGGESTIONS
        ):
            return suggestions
        try:
            places = await self.api.search_cities(query.strip())
        except APIError as e:
            logger.info(f"City search for {query!r} failed: {e.error}")
            return suggestions
        for place in places:
            name = place.get("name")
            if name and name not in suggestions:
                suggestions.append(name)
        return suggestions[:MAX_SUGGESTIONS]

    # ==================== SETTINGS ====================

    def apply_settings(self) -> None:
        """(Re)create the auto-refresh timer from current settings."""
        settings = self.state.settings
        self.renderer.unit = settings.temperature_unit
        if settings.auto_refresh and settings.refresh_interval > 0:
            interval = settings.refresh_interval / 1000
            if not self.refresh_timer.running or self.refresh_timer.interval != interval:
                self.refresh_timer.start(interval)
        else:
            self.refresh_timer.cancel()

    async def update_setting(self, key: str, value: Any) -> Settings:
        """Validate, persist and apply one setting."""
        if key not in Settings.model_fields or key == "schema_version":
            raise KeyError(f"Unknown setting: {key}")
        settings = Settings.model_validate({**self.state.settings.model_dump(), key: value})
        await self._replace_settings(settings)
        self.state.notify("Settings saved", "success")
        return settings

    async def toggle_temperature_unit(self) -> str:
        unit = "F" if self.state.settings.temperature_unit == "C" else "C"
        await self._replace_settings(self.state.settings.model_copy(update={"temperature_unit": unit}))
        self.state.notify(f"Temperature unit changed to {unit_name(unit)}", "info")
        return unit

    async def reset_settings(self) -> Settings:
        await self._replace_settings(Settings())
        self.state.notify("Settings reset to defaults", "info")
        return self.state.settings

    async def _replace_settings(self, settings: Settings) -> None:
        unit_changed = settings.temperature_unit != self.state.settings.temperature_unit
        self.state.settings = settings
        self.settings_store.save(settings)
        self.apply_settings()
        if unit_changed:
            await self.renderer.redraw()

    # ==================== LOCATION ====================

    async def use_location(self, lat: float, lng: float) -> bool:
        """Explicit "use my location" action; always allowed, even after a denial."""
        self.state.location.allowed = True
        self.state.location.save(self.store)
        return await self.load_by_coordinates(lat, lng)

    def deny_location(self) -> None:
        self.state.location.allowed = False
        self.state.location.save(self.store)
        self.state.notify(f"Location access denied, showing {self.state.current_location}", "info")

    def clear_location_preference(self) -> None:
        self.state.location.allowed = None
        self.state.location.save(self.store)

"""API client for backend communication."""

import logging
from urllib.parse import quote

import httpx

from dashboard.config import API_BASE_URL, API_PREFIX, API_TIMEOUT

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Backend call failed; carries the gateway's error envelope."""

    def __init__(self, status_code: int | None, error: str, message: str = "", details: str | None = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details


class APIClient:
    """Async HTTP client for the gateway API."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize API client.

        Args:
            base_url: Gateway root URL.
            client: Optional preconfigured HTTP client (tests inject a mock transport).
        """
        self.base_url = f"{base_url}{API_PREFIX}"
        self.client = client or httpx.AsyncClient(timeout=API_TIMEOUT)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_weather(self, city: str) -> dict:
        """Current conditions for a place name."""
        return await self._get(f"/weather/{quote(city, safe='')}")

    async def get_weather_by_coords(self, latitude: float, longitude: float) -> dict:
        """Current conditions for a coordinate pair."""
        return await self._get(f"/weather/coords/{latitude}/{longitude}")

    async def get_air_quality(self, city: str) -> dict:
        return await self._get(f"/air-quality/{quote(city, safe='')}")

    async def get_weather_chart(self, city: str) -> dict:
        """Five-day forecast window for the chart."""
        return await self._get(f"/weather-chart/{quote(city, safe='')}")

    async def search_cities(self, query: str) -> list[dict]:
        return await self._get(f"/cities/search/{quote(query, safe='')}")

    async def get_health(self) -> dict:
        return await self._get("/health")

    async def _get(self, path: str):
        try:
            response = await self.client.get(f"{self.base_url}{path}")
        except httpx.RequestError as e:
            logger.warning(f"Connection error calling {path}: {e!r}")
            raise APIError(None, "Connection error", str(e)) from e

        if response.status_code == 200:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code == 404:
            error = "City not found"
        else:
            error = body.get("error") or f"Server error: {response.status_code}"
        raise APIError(response.status_code, error, body.get("message", ""), body.get("details"))

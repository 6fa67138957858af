"""Gateway error taxonomy.

Every failure the gateway reports is a ``GatewayError``. The exception
handler in ``gateway.main`` renders it as the shared error envelope
``{"error", "message", "details"}``.
"""

from fastapi import status


class GatewayError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"
    message: str = "Something went wrong on our end"

    def __init__(
        self,
        details: str | None = None,
        *,
        error: str | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(details or message or self.message)
        self.details = details
        if error is not None:
            self.error = error
        if message is not None:
            self.message = message

    def to_body(self) -> dict[str, str]:
        body = {"error": self.error, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class LocationNotFound(GatewayError):
    """User input could not be resolved to a place."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "City not found"
    message = "No location matches the requested place"


class UpstreamUnavailable(GatewayError):
    """Network failure, timeout or non-2xx answer from the provider."""

    error = "Weather data unavailable"
    message = "Unable to reach the upstream weather provider"


class InvalidUpstreamResponse(GatewayError):
    """Provider answered 2xx but required numeric fields are missing."""

    error = "Weather data unavailable"
    message = "The upstream weather provider returned an invalid response"


class NoAirQualityData(GatewayError):
    """Provider returned no air quality index for the location."""

    error = "Air quality data unavailable"
    message = "No air quality data is available for this location"

"""OpenWeatherMap current-weather HTTP client."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from weather_station.core.errors import WeatherStationError

logger = logging.getLogger(__name__)

OWM_WEATHER_URL = "http://api.openweathermap.org/data/2.5/weather"


class NetworkError(WeatherStationError):
    """Raised when the provider request fails for any transport, URL or HTTP reason."""


def build_source_url(
    latitude: float,
    longitude: float,
    app_id: str,
    base_url: str = OWM_WEATHER_URL,
) -> str:
    params = {
        "lat": latitude,
        "lon": longitude,
        "APPID": app_id,
        "units": "metric",
    }
    return f"{base_url}?{urlencode(params)}"


class OpenWeatherMapFetcher:
    """Perform a single GET against a fixed provider URL.

    The response body is returned untouched; judging its content is the
    parser's job. Retrying is left to the caller.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                return response.text
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            if isinstance(exc, httpx.HTTPStatusError):
                logger.debug(
                    "Weather provider error response: %s %s",
                    exc.response.status_code,
                    exc.response.text[:500],
                )
            raise NetworkError(f"Failed to fetch weather data: {exc}") from exc


__all__ = ["NetworkError", "OpenWeatherMapFetcher", "build_source_url", "OWM_WEATHER_URL"]

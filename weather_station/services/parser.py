"""Parsing of OpenWeatherMap current-weather payloads."""

from __future__ import annotations

import json
import math
from datetime import datetime, time, timezone, tzinfo
from typing import Any

from weather_station.core.errors import WeatherStationError
from weather_station.models import Snapshot


class MalformedPayloadError(WeatherStationError):
    """Raised when a provider payload is not usable weather data."""


def parse_payload(raw: str, tz: tzinfo | None = None) -> Snapshot:
    """Build a ``Snapshot`` from the raw provider response.

    Parsing is lenient: absent or null numbers fall back to zero, but the
    ``sys``, ``main`` and ``weather`` sections must be present and
    ``weather`` must hold at least one entry.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(f"payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedPayloadError("payload is not a JSON object")

    sys_section = _section(data, "sys")
    main_section = _section(data, "main")

    weather = data.get("weather")
    if not isinstance(weather, list):
        raise MalformedPayloadError("payload has no 'weather' array")
    if not weather:
        raise MalformedPayloadError("payload 'weather' array is empty")
    condition = weather[0]
    if not isinstance(condition, dict):
        raise MalformedPayloadError("payload 'weather[0]' is not an object")

    try:
        return Snapshot(
            situation_code=int(_number(condition, "id", "weather[0]")),
            temperature_celsius=float(_number(main_section, "temp", "main")),
            humidity_percent=float(_number(main_section, "humidity", "main")),
            sunrise=epoch_to_time_of_day(_number(sys_section, "sunrise", "sys"), tz),
            sunset=epoch_to_time_of_day(_number(sys_section, "sunset", "sys"), tz),
        )
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedPayloadError(f"payload value out of range: {exc}") from exc


def epoch_to_time_of_day(seconds: float, tz: tzinfo | None = None) -> time:
    """Convert UTC epoch seconds to a time of day in ``tz`` (local zone if None)."""
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone(tz)
    return moment.time().replace(microsecond=0)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"payload has no '{name}' object")
    return value


def _number(section: dict[str, Any], key: str, path: str) -> float:
    value = section.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedPayloadError(f"'{path}.{key}' is not a number: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedPayloadError(f"'{path}.{key}' is not finite: {value!r}")
    return value


__all__ = ["MalformedPayloadError", "parse_payload", "epoch_to_time_of_day"]

"""Base exception for the weather station service."""


class WeatherStationError(Exception):
    """Root of all errors raised by the weather station components."""


__all__ = ["WeatherStationError"]

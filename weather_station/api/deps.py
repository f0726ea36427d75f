"""API dependencies."""

from __future__ import annotations

from fastapi import Request

from weather_station.services.station import WeatherStation


def get_station(request: Request) -> WeatherStation:
    return request.app.state.station

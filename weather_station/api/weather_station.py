"""Weather station query and manual override endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from weather_station.api.deps import get_station
from weather_station.core.errors import WeatherStationError
from weather_station.models import OverrideRequest
from weather_station.services.station import WeatherStation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weatherStation", tags=["weather"])


class ClientRequestError(WeatherStationError):
    """Raised when an override request body is missing or invalid."""


def parse_override(body: bytes) -> OverrideRequest:
    if not body.strip():
        raise ClientRequestError("request body is empty")
    try:
        return OverrideRequest.model_validate_json(body)
    except ValidationError as exc:
        raise ClientRequestError(
            "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
                for error in exc.errors()
            )
        ) from exc


@router.get("", summary="Current weather snapshot")
async def get_weather(station: WeatherStation = Depends(get_station)) -> dict[str, Any]:
    return station.status()


@router.post("", summary="Override the current weather snapshot")
async def override_weather(
    request: Request, station: WeatherStation = Depends(get_station)
) -> dict[str, str]:
    payload = parse_override(await request.body())
    station.override(payload)
    return {"status": "ok"}


@router.get("/daylight", summary="Daylight state for the current snapshot")
async def get_daylight(station: WeatherStation = Depends(get_station)) -> dict[str, Any]:
    return station.daylight().to_dict()


__all__ = ["router", "ClientRequestError", "parse_override"]

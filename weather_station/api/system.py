"""Health, recent log entries and operational warnings."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from weather_station.api.deps import get_station
from weather_station.core.logging_config import get_log_buffer
from weather_station.services.station import WeatherStation

router = APIRouter(tags=["system"])


@router.get("/health", summary="Service health probe")
async def healthcheck(station: WeatherStation = Depends(get_station)) -> dict[str, Any]:
    """Heartbeat plus whether the background poll loop is alive."""

    return {"status": "ok", "polling": station.is_running}


@router.get("/logs")
def list_logs(
    limit: int = Query(100, ge=1, le=200),
    level: str | None = Query(None, description="Minimum level, e.g. WARNING"),
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, min_level=level)}


@router.get("/notifications")
def list_notifications(
    limit: int = Query(50, ge=1, le=200),
    station: WeatherStation = Depends(get_station),
) -> dict[str, list[dict[str, Any]]]:
    return {"notifications": [note.to_dict() for note in station.notifications.recent(limit)]}


__all__ = ["router"]

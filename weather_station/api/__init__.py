"""API router definitions."""

from fastapi import APIRouter

from .system import router as system_router
from .weather_station import router as weather_station_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(weather_station_router)

__all__ = ["api_router"]

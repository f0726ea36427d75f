"""Weather station FastAPI application package."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from .api import api_router
from .api.weather_station import ClientRequestError
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .services.station import WeatherStation


def create_app(
    settings: Settings | None = None,
    station: WeatherStation | None = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(service_name=settings.service_name, level=settings.log_level)
    logger = logging.getLogger(__name__)

    if station is None:
        station = WeatherStation.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.poll_enabled:
            station.start()
        else:
            logger.info("Weather poll loop disabled by configuration")
        yield
        await station.stop()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.station = station
    app.include_router(api_router, prefix=settings.api_prefix)
    if settings.metrics_enabled:
        app.mount("/metrics", make_asgi_app())

    @app.exception_handler(ClientRequestError)
    async def client_request_error_handler(request: Request, exc: ClientRequestError) -> JSONResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    logger.info(
        "Initialized weather station API (lat=%s, lon=%s, poll_enabled=%s)",
        settings.latitude,
        settings.longitude,
        settings.poll_enabled,
    )
    return app


__all__ = ["create_app"]

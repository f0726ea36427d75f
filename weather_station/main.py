"""Command-line entry point for the weather station service."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

import uvicorn

from weather_station.core.config import settings
from weather_station.core.logging_config import setup_logging
from weather_station.services.station import WeatherStation

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the weather station service.")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0).")
    parser.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080).")
    parser.add_argument(
        "--oneshot",
        action="store_true",
        help="Run a single fetch cycle, print the resulting status and exit.",
    )
    return parser.parse_args(argv)


async def run_oneshot(station: WeatherStation) -> int:
    outcome = await station.poller.run_cycle()
    logger.info("One-shot weather cycle complete (outcome=%s)", outcome.value)
    print(json.dumps(station.status(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if args.oneshot:
        setup_logging(service_name=settings.service_name, level=settings.log_level)
        return asyncio.run(run_oneshot(WeatherStation.from_settings(settings)))

    uvicorn.run(
        "weather_station:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=False,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

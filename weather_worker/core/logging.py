"""Logging setup and the per-request access line."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Request

from weather_worker.services.coordinates import resolve_coordinates, resolve_region

logger = logging.getLogger("weather_worker.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Unknown level names fall back to INFO rather than aborting startup.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("weather_worker").setLevel(resolved)


def log_request(request: Request) -> None:
    # Best effort: a broken header must never fail the request itself.
    try:
        coordinates = resolve_coordinates(request.headers)
        logger.info(
            "%s - [%s], located at: (%s, %s), within: %s",
            datetime.now(timezone.utc).isoformat(),
            request.url.path,
            coordinates.lat,
            coordinates.lon,
            resolve_region(request.headers),
        )
    except Exception:  # pragma: no cover - logging must not affect responses
        logger.debug("Failed to write request log line", exc_info=True)

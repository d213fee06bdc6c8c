from __future__ import annotations

import logging
from typing import Optional, Tuple

import httpx

from weather_worker.core.errors import UpstreamUnreachable
from weather_worker.services.upstream_request import UpstreamRequest

logger = logging.getLogger("weather_worker.providers.openweather")


class OpenWeatherClient:
    """
    OpenWeatherMap One Call client.

    Endpoint used:
    - GET https://api.openweathermap.org/data/2.5/onecall?lat=..&lon=..&exclude=..&appid=..

    Non-success statuses are returned to the caller as data; only transport
    failures (DNS, TCP, TLS, timeouts) raise `UpstreamUnreachable`.
    """

    def __init__(self, timeout_s: float = 8.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout_s
        self.transport = transport

    async def fetch(self, request: UpstreamRequest) -> Tuple[int, bytes]:
        logger.debug("GET %s", request.redacted_url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(request.url, headers=request.header_dict())
        except httpx.TimeoutException as exc:
            logger.error("Weather request timed out after %ss: %s", self.timeout, type(exc).__name__)
            raise UpstreamUnreachable("Weather service timeout") from exc
        except httpx.RequestError as exc:
            # Transport and decoding failures alike. The exception text can embed
            # the URL, so only the type is logged.
            logger.error("Weather request failed: %s", type(exc).__name__)
            raise UpstreamUnreachable("Weather request failed") from exc

        logger.debug("Weather service answered status=%s bytes=%s", r.status_code, len(r.content))
        return r.status_code, r.content

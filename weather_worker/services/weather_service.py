from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from weather_worker.core.errors import ClientDisconnected, UpstreamUnreachable
from weather_worker.schemas.weather import (
    CurrentWeatherResponse,
    DailyForecastResponse,
    ForecastResponse,
)
from weather_worker.services.coordinates import Coordinates
from weather_worker.services.normalizer import ClientError, NormalizedResponse, normalize
from weather_worker.services.providers.openweather_client import OpenWeatherClient
from weather_worker.services.upstream_request import build_upstream_request

logger = logging.getLogger("weather_worker.services.weather")

T = TypeVar("T")


@dataclass(frozen=True)
class WeatherVariant:
    """
    Describes one weather endpoint: which One Call sections to drop and
    which schema the remaining payload must satisfy.
    """

    name: str
    exclude: Tuple[str, ...]
    schema: Type[BaseModel]


CURRENT = WeatherVariant(
    name="current",
    exclude=("hourly", "daily", "minutely"),
    schema=CurrentWeatherResponse,
)
FORECAST = WeatherVariant(
    name="forecast",
    exclude=("current", "minutely"),
    schema=ForecastResponse,
)
DAILY = WeatherVariant(
    name="daily",
    exclude=("current", "hourly", "minutely"),
    schema=DailyForecastResponse,
)


async def run_bounded(
    call: Awaitable[T],
    *,
    deadline_s: float,
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    poll_interval_s: float = 0.1,
) -> T:
    """
    Await `call`, giving up after `deadline_s` or as soon as the client disconnects.

    Raises:
        UpstreamUnreachable: the deadline elapsed first.
        ClientDisconnected: `is_disconnected()` reported True first.
    """
    call_task = asyncio.ensure_future(call)
    watcher: Optional[asyncio.Task] = None
    if is_disconnected is not None:
        watcher = asyncio.ensure_future(_wait_for_disconnect(is_disconnected, poll_interval_s))

    waiting = {call_task} if watcher is None else {call_task, watcher}
    try:
        done, _ = await asyncio.wait(waiting, timeout=deadline_s, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in waiting:
            if not task.done():
                task.cancel()

    if call_task in done:
        return call_task.result()
    if watcher is not None and watcher in done:
        raise ClientDisconnected()
    raise UpstreamUnreachable(f"Weather service did not answer within {deadline_s}s")


async def _wait_for_disconnect(is_disconnected: Callable[[], Awaitable[bool]], interval: float) -> None:
    try:
        while not await is_disconnected():
            await asyncio.sleep(interval)
    except Exception:
        # Without a working disconnect check only the deadline applies.
        logger.debug("Disconnect detection unavailable", exc_info=True)
        await asyncio.get_running_loop().create_future()


class WeatherService:
    """
    Runs one weather request end to end:
    coordinates -> upstream request -> upstream call -> classification.
    """

    def __init__(self, client: OpenWeatherClient, api_key: str, base_url: str, deadline_s: float):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url
        self.deadline_s = deadline_s

    async def fetch(
        self,
        variant: WeatherVariant,
        coordinates: Coordinates,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> NormalizedResponse:
        request = build_upstream_request(coordinates, variant.exclude, self.api_key, self.base_url)
        logger.debug("Querying %s weather: %s", variant.name, request.redacted_url)

        status, body = await run_bounded(
            self.client.fetch(request),
            deadline_s=self.deadline_s,
            is_disconnected=is_disconnected,
        )

        result = normalize(status, body, variant.schema)
        if isinstance(result, ClientError):
            logger.warning(
                "Upstream %s request classified as %s (upstream status=%s)",
                variant.name,
                result.kind.value,
                status,
            )
        return result

import asyncio
import copy
from typing import Any, Dict, List, Optional

import httpx
import pytest

from weather_worker.core.config import Settings, get_settings
from weather_worker.main import app
from weather_worker.routers.weather import get_weather_client
from weather_worker.services.providers.openweather_client import OpenWeatherClient

CURRENT_PAYLOAD: Dict[str, Any] = {
    "lat": 40.7,
    "lon": -74.0,
    "timezone": "America/New_York",
    "timezone_offset": -18000,
    "current": {
        "dt": 1700000000,
        "sunrise": 1699960000,
        "sunset": 1699995000,
        "temp": 283.1,
        "feels_like": 281.0,
        "pressure": 1015,
        "humidity": 60,
        "dew_point": 275.0,
        "uvi": 1,
        "clouds": 20,
        "visibility": 10000,
        "wind_speed": 3.1,
        "wind_deg": 200,
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    },
}

HOURLY_ENTRY: Dict[str, Any] = {
    "dt": 1700000000,
    "temp": 283.1,
    "feels_like": 281.0,
    "pressure": 1015,
    "humidity": 60,
    "dew_point": 275.0,
    "uvi": 0.4,
    "clouds": 75,
    "visibility": 10000,
    "wind_speed": 3.1,
    "wind_deg": 200,
    "wind_gust": 5.2,
    "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
    "pop": 0.35,
    "rain": {"1h": 0.21},
}

DAILY_ENTRY: Dict[str, Any] = {
    "dt": 1700049600,
    "sunrise": 1699960000,
    "sunset": 1699995000,
    "moonrise": 1699970000,
    "moonset": 1700010000,
    "moon_phase": 0.08,
    "temp": {"day": 284.2, "min": 279.5, "max": 286.0, "night": 280.1, "eve": 283.3, "morn": 279.9},
    "feels_like": {"day": 283.0, "night": 278.4, "eve": 282.0, "morn": 277.6},
    "pressure": 1018,
    "humidity": 55,
    "dew_point": 275.4,
    "wind_speed": 4.6,
    "wind_deg": 250,
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "clouds": 68,
    "pop": 0.2,
    "uvi": 2.1,
}


class FakeUpstream:
    """
    Scriptable stand-in for the One Call API, served through `httpx.MockTransport`.
    """

    def __init__(self):
        self.status = 200
        self.json: Any = copy.deepcopy(CURRENT_PAYLOAD)
        self.content: Optional[bytes] = None
        self.headers: Dict[str, str] = {}
        self.error: Optional[Exception] = None
        self.delay_s: float = 0.0
        self.requests: List[httpx.Request] = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status, headers=self.headers, content=self.content)
        return httpx.Response(self.status, json=self.json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def current_payload():
    return copy.deepcopy(CURRENT_PAYLOAD)


@pytest.fixture
def forecast_payload():
    return {
        "lat": 40.7,
        "lon": -74.0,
        "timezone": "America/New_York",
        "timezone_offset": -18000,
        "hourly": [copy.deepcopy(HOURLY_ENTRY)],
        "daily": [copy.deepcopy(DAILY_ENTRY)],
    }


@pytest.fixture
def daily_payload():
    return {
        "lat": 40.7,
        "lon": -74.0,
        "timezone": "America/New_York",
        "timezone_offset": -18000,
        "daily": [copy.deepcopy(DAILY_ENTRY)],
    }


@pytest.fixture
def test_settings():
    """
    Settings with every required value present, isolated from the environment's `.env`.
    """
    return Settings(
        _env_file=None,
        weather_open_api_key="test-key",
        worker_version="1.2.3",
        upstream_timeout_s=1.0,
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def test_app(test_settings, upstream):
    """
    Return the FastAPI app with settings and the upstream client overridden.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_weather_client] = lambda: OpenWeatherClient(
        timeout_s=test_settings.upstream_timeout_s,
        transport=upstream.transport,
    )
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def geo_headers():
    return {"cf-iplatitude": "40.7", "cf-iplongitude": "-74.0", "cf-region": "New York"}

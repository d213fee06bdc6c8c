from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from weather_worker.core.config import Settings, get_settings
from weather_worker.core.errors import ClientDisconnected, LocationUnavailable
from weather_worker.services.coordinates import resolve_coordinates, resolve_optional_coordinates
from weather_worker.services.normalizer import ClientError
from weather_worker.services.providers.openweather_client import OpenWeatherClient
from weather_worker.services.weather_service import (
    CURRENT,
    DAILY,
    FORECAST,
    WeatherService,
    WeatherVariant,
)

router = APIRouter(tags=["Weather"])

# Non-standard "client closed request" status, never actually delivered.
CLIENT_CLOSED_REQUEST = 499


def get_weather_client(settings: Settings = Depends(get_settings)) -> OpenWeatherClient:
    """
    FastAPI dependency providing the upstream client.

    Tests override it with a client backed by `httpx.MockTransport`.
    """
    return OpenWeatherClient(timeout_s=settings.upstream_timeout_s)


def get_weather_service(
    settings: Settings = Depends(get_settings),
    client: OpenWeatherClient = Depends(get_weather_client),
) -> WeatherService:
    return WeatherService(
        client=client,
        api_key=settings.api_key(),
        base_url=settings.openweather_base_url,
        deadline_s=settings.upstream_timeout_s,
    )


async def _serve(
    variant: WeatherVariant,
    request: Request,
    settings: Settings,
    service: WeatherService,
) -> Response:
    if settings.require_location:
        coordinates = resolve_optional_coordinates(request.headers)
        if coordinates is None:
            raise LocationUnavailable("Request carries no geolocation")
    else:
        coordinates = resolve_coordinates(request.headers)

    try:
        result = await service.fetch(variant, coordinates, is_disconnected=request.is_disconnected)
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    if isinstance(result, ClientError):
        message = result.detailed_message if settings.detailed_errors else result.message
        return JSONResponse(status_code=result.status_code, content=message)

    return JSONResponse(status_code=result.status_code, content=result.body())


@router.get(
    "/",
    summary="Current weather (root alias)",
    description="Same as `GET /weather`.",
    include_in_schema=False,
)
@router.get(
    "/weather",
    summary="Current weather at the caller's location",
    description=(
        "Resolves the caller's coordinates from the edge geolocation headers "
        "(`cf-iplatitude`, `cf-iplongitude`) and relays the One Call `current` section.\n\n"
        "- Upstream 401 -> 401 `\"Bad Request\"`\n"
        "- Malformed upstream payload or any other upstream status -> 400 `\"Bad Request\"`\n"
        "- Upstream unreachable or too slow -> 502 `\"Bad Gateway\"`"
    ),
)
async def current_weather(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: WeatherService = Depends(get_weather_service),
):
    return await _serve(CURRENT, request, settings, service)


@router.get(
    "/weather/forecast",
    summary="Hourly and daily forecast at the caller's location",
    description="Relays the One Call `hourly` and `daily` sections. Error mapping as for `/weather`.",
)
async def forecast_weather(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: WeatherService = Depends(get_weather_service),
):
    return await _serve(FORECAST, request, settings, service)


@router.get(
    "/weather/daily",
    summary="Daily forecast at the caller's location",
    description="Relays the One Call `daily` section only. Error mapping as for `/weather`.",
)
async def daily_weather(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: WeatherService = Depends(get_weather_service),
):
    return await _serve(DAILY, request, settings, service)

from fastapi import APIRouter, Depends

from weather_worker.core.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    summary="Service health check",
    description=(
        "Checks whether the worker is running and returns basic service information. "
        "This endpoint **does not** call the weather API."
    ),
    response_description="Service status",
)
def health(settings: Settings = Depends(get_settings)):
    """
    Basic health check for the worker.

    **Returns:**
    - `status`: Always `ok` if the service is running
    - `service`: Service name (configured via `APP_NAME`)
    - `environment`: Current environment (configured via `ENVIRONMENT`, e.g. local/dev/prod)
    - `upstream_configured`: Whether `WEATHER_OPEN_API_KEY` is set
    """
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "upstream_configured": settings.has_api_key(),
    }

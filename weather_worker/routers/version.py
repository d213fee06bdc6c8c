from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from weather_worker.core.config import Settings, get_settings

router = APIRouter(tags=["Version"])


@router.get(
    "/worker-version",
    response_class=PlainTextResponse,
    summary="Deployed worker version",
    description="Returns the configured `WORKER_VERSION` as plain text.",
)
def worker_version(settings: Settings = Depends(get_settings)) -> str:
    """
    **Errors:**
    - Returns HTTP 500 if `WORKER_VERSION` is not configured.
    """
    return settings.version()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from weather_worker.core.config import settings
from weather_worker.core.errors import ConfigurationMissing, LocationUnavailable, UpstreamUnreachable
from weather_worker.core.logging import configure_logging, log_request
from weather_worker.routers.health import router as health_router
from weather_worker.routers.version import router as version_router
from weather_worker.routers.weather import router as weather_router

logger = logging.getLogger("weather_worker.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    On startup:
    - Configures logging from `LOG_LEVEL`.
    - Fails closed if `WEATHER_OPEN_API_KEY` or `WORKER_VERSION` is missing,
      since every weather call needs the key.

    On shutdown:
    - Nothing to release: no pools or caches are kept between requests.
    """
    configure_logging(settings.log_level)
    settings.validate_required()
    logger.info("%s started (environment=%s)", settings.app_name, settings.environment)
    yield


async def upstream_unreachable_handler(request: Request, exc: UpstreamUnreachable) -> JSONResponse:
    logger.error("Upstream unreachable for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content="Bad Gateway")


async def location_unavailable_handler(request: Request, exc: LocationUnavailable) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content="Bad Request")


async def configuration_missing_handler(request: Request, exc: ConfigurationMissing) -> JSONResponse:
    logger.critical("Misconfiguration: %s", exc)
    return JSONResponse(status_code=500, content="Internal Server Error")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    - Initializes the FastAPI app with metadata and documentation endpoints.
    - Registers all API routers and the error-to-response handlers.
    - Adds the per-request log line.
    - Applies the application lifespan handler.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Weather edge worker: relays OpenWeatherMap One Call data for the caller's location",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(UpstreamUnreachable, upstream_unreachable_handler)
    app.add_exception_handler(LocationUnavailable, location_unavailable_handler)
    app.add_exception_handler(ConfigurationMissing, configuration_missing_handler)

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        log_request(request)
        return await call_next(request)

    # Register API routers
    app.include_router(weather_router)
    app.include_router(version_router)
    app.include_router(health_router)

    return app


# Application entry point
app = create_app()

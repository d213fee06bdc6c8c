from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_worker.core.errors import ConfigurationMissing


class Settings(BaseSettings):
    """
    Application configuration settings.

    This class loads configuration values from environment variables
    and optionally from a `.env` file. It uses Pydantic Settings
    to provide type validation and default values.

    Environment variables take precedence over `.env` values.

    Secrets are optional at load time so the module can be imported anywhere;
    `validate_required()` is called from the application lifespan to fail
    closed before the first request is served.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ---------------------------------------------------------------------
    # Application settings
    # ---------------------------------------------------------------------

    app_name: str = Field(
        default="weather-edge-worker",
        alias="APP_NAME",
        description="Application name displayed in logs and API documentation",
    )

    environment: str = Field(
        default="local",
        alias="ENVIRONMENT",
        description="Runtime environment (local, dev, prod)",
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    worker_version: Optional[str] = Field(
        default=None,
        alias="WORKER_VERSION",
        description="Version string returned by GET /worker-version",
    )

    # ---------------------------------------------------------------------
    # OpenWeatherMap upstream
    # ---------------------------------------------------------------------

    weather_open_api_key: Optional[SecretStr] = Field(
        default=None,
        alias="WEATHER_OPEN_API_KEY",
        description="API key used to authenticate requests to the OpenWeatherMap One Call API",
    )

    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/onecall",
        alias="OPENWEATHER_BASE_URL",
        description="One Call endpoint queried for every weather request",
    )

    upstream_timeout_s: float = Field(
        default=8.0,
        gt=0,
        alias="UPSTREAM_TIMEOUT_S",
        description="Timeout (seconds) for the upstream call, also used as the overall request deadline",
    )

    # ---------------------------------------------------------------------
    # Response policy
    # ---------------------------------------------------------------------

    require_location: bool = Field(
        default=False,
        alias="REQUIRE_LOCATION",
        description="Reject requests without edge geolocation (400) instead of querying (0, 0)",
    )

    detailed_errors: bool = Field(
        default=False,
        alias="DETAILED_ERRORS",
        description="Return a kind-specific error message instead of the generic 'Bad Request'",
    )

    def has_api_key(self) -> bool:
        return self.weather_open_api_key is not None and bool(self.weather_open_api_key.get_secret_value())

    def api_key(self) -> str:
        """
        Return the upstream API key in clear text.

        Raises:
            ConfigurationMissing: if `WEATHER_OPEN_API_KEY` is not set.
        """
        if not self.has_api_key():
            raise ConfigurationMissing("WEATHER_OPEN_API_KEY")
        return self.weather_open_api_key.get_secret_value()

    def version(self) -> str:
        if not self.worker_version:
            raise ConfigurationMissing("WORKER_VERSION")
        return self.worker_version

    def validate_required(self) -> None:
        """Raise `ConfigurationMissing` for the first required value that is absent."""
        self.api_key()
        self.version()


# Singleton settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    FastAPI dependency returning the process-wide settings.

    Tests override this dependency to inject their own configuration.
    """
    return settings

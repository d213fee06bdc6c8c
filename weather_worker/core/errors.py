"""Error taxonomy for the weather worker."""

from __future__ import annotations

from enum import Enum


class WeatherWorkerError(Exception):
    """Base class for every error raised by the worker."""


class ConfigurationMissing(WeatherWorkerError):
    """A required configuration value (secret or variable) is absent."""

    def __init__(self, name: str):
        super().__init__(f"{name} is not configured")
        self.name = name


class LocationUnavailable(WeatherWorkerError):
    """The inbound request carries no usable geolocation."""


class ClientDisconnected(WeatherWorkerError):
    """The inbound client went away before the upstream call finished."""


class UpstreamUnreachable(WeatherWorkerError):
    """Transport-level failure reaching the weather API (DNS, TCP, TLS, timeout)."""


class UpstreamResponseError(WeatherWorkerError):
    """The weather API answered, but not with a usable payload."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status


class MalformedUpstreamPayload(UpstreamResponseError):
    """Upstream returned 200 with a body that does not match the schema."""


class UpstreamAuthFailure(UpstreamResponseError):
    """Upstream returned 401: the API key is invalid or expired."""


class UpstreamOtherFailure(UpstreamResponseError):
    """Upstream returned any other non-success status."""


class ErrorKind(str, Enum):
    MALFORMED_UPSTREAM_PAYLOAD = "malformed_upstream_payload"
    UPSTREAM_AUTH_FAILURE = "upstream_auth_failure"
    UPSTREAM_OTHER_FAILURE = "upstream_other_failure"

    @property
    def exception_class(self) -> type[UpstreamResponseError]:
        return _KIND_EXCEPTIONS[self]


_KIND_EXCEPTIONS = {
    ErrorKind.MALFORMED_UPSTREAM_PAYLOAD: MalformedUpstreamPayload,
    ErrorKind.UPSTREAM_AUTH_FAILURE: UpstreamAuthFailure,
    ErrorKind.UPSTREAM_OTHER_FAILURE: UpstreamOtherFailure,
}

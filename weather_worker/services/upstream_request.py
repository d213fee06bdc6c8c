from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

import httpx

from weather_worker.services.coordinates import Coordinates

REDACTED = "***"

DEFAULT_HEADERS = (
    ("content-type", "application/json"),
    ("accept", "application/json"),
)


@dataclass(frozen=True)
class UpstreamRequest:
    """
    Fully-formed One Call request descriptor.

    `repr()` and `redacted_url` hide the API key; only `url` carries it.
    """

    base_url: str
    coordinates: Coordinates
    exclude: Tuple[str, ...]
    api_key: str = field(repr=False)
    headers: Tuple[Tuple[str, str], ...] = DEFAULT_HEADERS

    def _params(self, api_key: str) -> Dict[str, str]:
        # Order matters for readability of logs: lat, lon, exclude, appid.
        return {
            "lat": str(self.coordinates.lat),
            "lon": str(self.coordinates.lon),
            "exclude": ",".join(self.exclude),
            "appid": api_key,
        }

    @property
    def params(self) -> Dict[str, str]:
        return self._params(self.api_key)

    @property
    def url(self) -> httpx.URL:
        return httpx.URL(self.base_url, params=self.params)

    @property
    def redacted_url(self) -> str:
        return str(httpx.URL(self.base_url, params=self._params(REDACTED)))

    def header_dict(self) -> Dict[str, str]:
        return dict(self.headers)


def build_upstream_request(
    coordinates: Coordinates,
    exclude: Iterable[str],
    api_key: str,
    base_url: str,
) -> UpstreamRequest:
    """
    Compose the outbound One Call query.

    Args:
        coordinates: Location to query. Ranges are not validated.
        exclude: Data sections to omit (e.g. "hourly", "minutely").
        api_key: Upstream key, injected from configuration. Never logged.
        base_url: One Call endpoint.

    The inputs are not mutated; `exclude` is copied into a tuple.
    """
    return UpstreamRequest(
        base_url=base_url,
        coordinates=coordinates,
        exclude=tuple(exclude),
        api_key=api_key,
    )

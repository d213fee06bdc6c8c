from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

# Visitor location headers added by the edge proxy.
LATITUDE_HEADER = "cf-iplatitude"
LONGITUDE_HEADER = "cf-iplongitude"
REGION_HEADER = "cf-region"

UNKNOWN_REGION = "unknown region"


@dataclass(frozen=True)
class Coordinates:
    """
    Latitude/longitude pair of the inbound request.

    Valid ranges are lat in [-90, 90] and lon in [-180, 180]. They are not
    enforced here: out-of-range values are forwarded and the upstream API
    rejects them.
    """

    lat: float = 0.0
    lon: float = 0.0


DEFAULT_COORDINATES = Coordinates(0.0, 0.0)


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def resolve_optional_coordinates(headers: Mapping[str, str]) -> Optional[Coordinates]:
    """
    Read the request geolocation, or None when either half is missing or unparsable.
    """
    lat = _parse_float(headers.get(LATITUDE_HEADER))
    lon = _parse_float(headers.get(LONGITUDE_HEADER))
    if lat is None or lon is None:
        return None
    return Coordinates(lat=lat, lon=lon)


def resolve_coordinates(headers: Mapping[str, str]) -> Coordinates:
    """
    Read the request geolocation, falling back to (0.0, 0.0).

    Never raises: absence of location is not an error at this level.
    """
    return resolve_optional_coordinates(headers) or DEFAULT_COORDINATES


def resolve_region(headers: Mapping[str, str]) -> str:
    return headers.get(REGION_HEADER) or UNKNOWN_REGION

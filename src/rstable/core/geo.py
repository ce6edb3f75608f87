from __future__ import annotations

from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt

"""
Geospatial helpers.

A tiny geometry layer so the view can compute "distance from me" without
pulling in GIS dependencies.
"""

EARTH_RADIUS_M = 6_371_000


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points."""
    lat1 = radians(a.lat)
    lng1 = radians(a.lng)
    lat2 = radians(b.lat)
    lng2 = radians(b.lng)

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * asin(min(1.0, sqrt(h)))


def is_known(point: GeoPoint | None) -> bool:
    """False for a missing point or one carrying the zero sentinel in either component.

    The sync job writes 0 for coordinates it could not parse, so a zero latitude
    or longitude means "no data" rather than the equator/meridian.
    """
    if point is None:
        return False
    return bool(point.lat) and bool(point.lng)


def distance_m(a: GeoPoint | None, b: GeoPoint | None) -> float | None:
    """Distance in meters, or None ("unknown") when either side has no usable coordinates."""
    if not (is_known(a) and is_known(b)):
        return None
    return haversine_m(a, b)

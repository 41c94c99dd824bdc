"""Geospatial helpers."""
from __future__ import annotations

import math

from .models import Coordinate

EARTH_RADIUS_M = 6_371_008.8


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a past 1.0 for near-antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    # Argument order is normalized so the result is bit-for-bit symmetric.
    if (a.latitude, a.longitude) > (b.latitude, b.longitude):
        a, b = b, a
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def offset_coordinate(origin: Coordinate, north_m: float = 0.0, east_m: float = 0.0) -> Coordinate:
    """Shift a coordinate by metric offsets (spherical approximation)."""
    dlat = math.degrees(north_m / EARTH_RADIUS_M)
    cos_lat = max(1e-12, math.cos(math.radians(origin.latitude)))
    dlon = math.degrees(east_m / (EARTH_RADIUS_M * cos_lat))
    return Coordinate(origin.latitude + dlat, origin.longitude + dlon)

"""Great-circle distance helpers."""

from __future__ import annotations

import math

from app.schemas.place import GeoPoint

EARTH_RADIUS_KM = 6371.0


def distance_km(origin: GeoPoint, destination: GeoPoint) -> float:
    """Return the haversine distance between two points in kilometres.

    Coordinates are not validated here; callers pass points already bounded
    by ``GeoPoint``.
    """
    lat1 = math.radians(origin.lat)
    lat2 = math.radians(destination.lat)
    delta_lat = math.radians(destination.lat - origin.lat)
    delta_lng = math.radians(destination.lng - origin.lng)

    a = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    # Float error can push ``a`` a hair past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def format_distance(km: float) -> str:
    """Format a distance for display: metres below 1 km, otherwise one decimal km."""
    if km < 1:
        return f"{math.floor(km * 1000 + 0.5)}m"
    return f"{km:.1f}km"

from __future__ import annotations

import math
from numbers import Real

from src.domain.models import GeoPoint

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


def haversine_distance_km(a: GeoPoint | None, b: GeoPoint | None) -> float | None:
    """Great-circle distance in kilometers.

    Returns None when either point is missing. Coordinates are not range-checked
    here; callers get whatever the formula yields.
    """

    if a is None or b is None:
        return None

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)

    h = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
    return EARTH_RADIUS_KM * c


def _is_number(value: object) -> bool:
    # bool is a Real subclass; a flag is never a distance.
    return isinstance(value, Real) and not isinstance(value, bool)


def km_to_miles(km: float | None) -> float | None:
    if not _is_number(km):
        return None
    return float(km) * KM_TO_MILES  # type: ignore[arg-type]


def miles_to_km(miles: float | None) -> float | None:
    if not _is_number(miles):
        return None
    return float(miles) / KM_TO_MILES  # type: ignore[arg-type]

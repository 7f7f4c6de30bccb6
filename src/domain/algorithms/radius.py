from __future__ import annotations

import math

from src.domain.algorithms.geo_utils import KM_TO_MILES, miles_to_km

MIN_RADIUS_MILES = 5.0
MAX_RADIUS_MILES = 300.0
RADIUS_STEP_MILES = 10.0
DEFAULT_RADIUS_MILES = 60.0

KM_PER_DEGREE_LAT = 111.32
MIN_MAP_DELTA = 0.02
MAX_MAP_LATITUDE = 89.9


def clamp_radius(radius_miles: float) -> float:
    return max(MIN_RADIUS_MILES, min(MAX_RADIUS_MILES, float(radius_miles)))


def adjust_radius(current_miles: float, delta_miles: float) -> float:
    """Interactive radius change, kept inside the allowed band."""

    return clamp_radius(current_miles + delta_miles)


def step_radius(current_miles: float, direction: int) -> float:
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or 1, got {direction}")
    return adjust_radius(current_miles, direction * RADIUS_STEP_MILES)


def region_for_radius(radius_miles: float | None, latitude: float) -> tuple[float, float]:
    """Map span (lat_delta, lon_delta) in degrees that fits the radius.

    A missing or zero radius falls back to the default radius.
    """

    radius_km = miles_to_km(radius_miles)
    if not radius_km:
        radius_km = DEFAULT_RADIUS_MILES / KM_TO_MILES

    lat_delta = max(radius_km / KM_PER_DEGREE_LAT, MIN_MAP_DELTA)
    safe_lat = min(max(latitude, -MAX_MAP_LATITUDE), MAX_MAP_LATITUDE)
    lon_delta = max(
        radius_km / (KM_PER_DEGREE_LAT * math.cos(math.radians(safe_lat))),
        MIN_MAP_DELTA,
    )
    return lat_delta, lon_delta


def format_distance(miles: float | None) -> str:
    if miles is None:
        return ""
    if miles < 10:
        return f"{miles:.1f} mi"
    return f"{miles:.0f} mi"

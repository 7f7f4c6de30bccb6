from __future__ import annotations

import math
from dataclasses import dataclass


def _as_coordinate(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")

    @classmethod
    def parse(cls, lat: object, lon: object) -> GeoPoint | None:
        """Build a point from loosely typed values.

        Returns None when either coordinate is missing, non-numeric, NaN or out
        of range.
        """

        lat_f = _as_coordinate(lat)
        lon_f = _as_coordinate(lon)
        if lat_f is None or lon_f is None:
            return None
        try:
            return cls(lat=lat_f, lon=lon_f)
        except ValueError:
            return None

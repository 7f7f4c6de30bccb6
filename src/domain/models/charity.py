from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Charity:
    id: str
    location: GeoPoint | None = None
    name: str | None = None
    category: str | None = None
    country: str | None = None
    city: str | None = None
    stripe_account_id: str | None = None

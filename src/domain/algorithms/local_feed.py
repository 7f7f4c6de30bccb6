from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone

from src.domain.algorithms.geo_utils import haversine_distance_km, km_to_miles
from src.domain.models import (
    Charity,
    DistanceAnnotatedPost,
    GeoPoint,
    LocalFeed,
    NearbyCharity,
    Post,
)

logger = logging.getLogger(__name__)

CharityResolver = Callable[[str], Charity | None]


def charity_point(charity: Charity | None) -> GeoPoint | None:
    """Return the charity's location if both coordinates are usable."""

    if charity is None:
        return None
    location = getattr(charity, "location", None)
    if location is None:
        return None
    if isinstance(location, GeoPoint):
        return location
    return GeoPoint.parse(getattr(location, "lat", None), getattr(location, "lon", None))


def distance_miles(user_location: GeoPoint, charity: Charity | None) -> float | None:
    point = charity_point(charity)
    if point is None:
        return None
    return km_to_miles(haversine_distance_km(user_location, point))


def _resolve(resolve_charity: CharityResolver, post: Post) -> Charity | None:
    charity_id = getattr(post, "charity_id", None)
    if charity_id is None:
        return None
    try:
        return resolve_charity(charity_id)
    except Exception:
        logger.warning(
            "Charity lookup failed; dropping post from local feed",
            exc_info=True,
            extra={"post_id": getattr(post, "id", None), "charity_id": charity_id},
        )
        return None


def _timestamp_key(item: DistanceAnnotatedPost) -> float:
    """Epoch seconds of the post timestamp; unparseable values sort as oldest."""

    raw = item.post.timestamp
    if not raw:
        return float("-inf")
    try:
        ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (AttributeError, TypeError, ValueError):
        return float("-inf")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


def filter_local_feed(
    posts: Sequence[Post],
    resolve_charity: CharityResolver,
    user_location: GeoPoint | None,
    radius_miles: float,
) -> LocalFeed:
    """Posts whose charity lies within `radius_miles` of the user.

    Nearest first; equal distances put the most recent post first, and posts
    that tie on both keep their input order. The radius is inclusive and is not
    clamped here; a NaN radius matches nothing.
    """

    if user_location is None or not posts:
        return LocalFeed()

    included: list[DistanceAnnotatedPost] = []
    distances: dict[str, float] = {}

    for post in posts:
        charity = _resolve(resolve_charity, post)
        if charity is None:
            continue

        distance = distance_miles(user_location, charity)
        if distance is None or not distance <= radius_miles:
            continue

        included.append(DistanceAnnotatedPost(post=post, distance_miles=distance))
        distances[post.id] = distance

    if not included:
        return LocalFeed()

    # Two stable passes: secondary key first, then the primary.
    included.sort(key=_timestamp_key, reverse=True)
    included.sort(key=lambda item: item.distance_miles)

    return LocalFeed(posts=tuple(item.post for item in included), distances=distances)


def find_nearby_charities(
    charities: Iterable[Charity],
    user_location: GeoPoint | None,
    radius_miles: float,
) -> tuple[NearbyCharity, ...]:
    if user_location is None:
        return ()

    out: list[NearbyCharity] = []
    for charity in charities:
        distance = distance_miles(user_location, charity)
        if distance is None or not distance <= radius_miles:
            continue
        out.append(NearbyCharity(charity=charity, distance_miles=distance))

    out.sort(key=lambda n: n.distance_miles)
    return tuple(out)

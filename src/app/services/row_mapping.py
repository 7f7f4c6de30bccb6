from __future__ import annotations

from typing import Any, Mapping

from src.domain.models import Charity, GeoPoint, Post


def _location(row: Mapping[str, Any]) -> GeoPoint | None:
    lat = row.get("location_lat")
    lon = row.get("location_lon")
    # Rows written before the location columns existed carry 0 for "unset".
    if lat == 0 or lon == 0:
        return None
    return GeoPoint.parse(lat, lon)


def _city(row: Mapping[str, Any]) -> str | None:
    address = row.get("address")
    if isinstance(address, str) and address.strip():
        return address.split(",")[0].strip()
    return row.get("country")


def _require_id(row: Mapping[str, Any]) -> str:
    value = row["id"]
    if value is None or str(value).strip() == "":
        raise ValueError("row has an empty id")
    return str(value)


def _count(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def charity_from_row(row: Mapping[str, Any]) -> Charity:
    """Map a `charities` row; raises KeyError or ValueError when the row has no id."""

    return Charity(
        id=_require_id(row),
        location=_location(row),
        name=row.get("name"),
        category=row.get("category"),
        country=row.get("country"),
        city=_city(row),
        stripe_account_id=row.get("stripe_account_id"),
    )


def post_from_row(row: Mapping[str, Any]) -> Post:
    """Map a `posts` row; raises KeyError or ValueError when the row has no id."""

    charity_id = row.get("charity_id")
    user_id = row.get("user_id")
    return Post(
        id=_require_id(row),
        charity_id=str(charity_id) if charity_id is not None else None,
        timestamp=str(row.get("created_at") or ""),
        user_id=str(user_id) if user_id is not None else None,
        type=row.get("type") or "update",
        title=row.get("title"),
        content=row.get("content"),
        image_url=row.get("image_url"),
        likes=_count(row.get("likes")),
        comments=_count(row.get("comments")),
        shares=_count(row.get("shares_count")),
    )

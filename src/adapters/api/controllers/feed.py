from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_local_feed_service
from src.adapters.api.schemas.feed import (
    CharitySchema,
    FollowedFeedRequestSchema,
    FollowedFeedResponseSchema,
    GeoPointSchema,
    LocalFeedRequestSchema,
    LocalFeedResponseSchema,
    NearbyCharitiesResponseSchema,
    NearbyCharitySchema,
    PostSchema,
)
from src.app.services.local_feed_service import LocalFeedService
from src.domain.algorithms.radius import format_distance
from src.domain.models import Charity, GeoPoint, Post

router = APIRouter(tags=["feed"])


def _post_to_schema(post: Post) -> PostSchema:
    return PostSchema(
        id=post.id,
        charity_id=post.charity_id,
        user_id=post.user_id,
        timestamp=post.timestamp,
        type=post.type,
        title=post.title,
        content=post.content,
        image_url=post.image_url,
        likes=post.likes,
        comments=post.comments,
        shares=post.shares,
    )


def _charity_to_schema(charity: Charity) -> CharitySchema:
    return CharitySchema(
        id=charity.id,
        name=charity.name,
        category=charity.category,
        country=charity.country,
        city=charity.city,
        location=(
            GeoPointSchema(lat=charity.location.lat, lon=charity.location.lon)
            if charity.location
            else None
        ),
    )


def _user_location(req: LocalFeedRequestSchema) -> GeoPoint | None:
    if req.location is None:
        return None
    return GeoPoint(lat=req.location.lat, lon=req.location.lon)


@router.post("/feed/local", response_model=LocalFeedResponseSchema)
def local_feed(
    req: LocalFeedRequestSchema,
    service: LocalFeedService = Depends(get_local_feed_service),
) -> LocalFeedResponseSchema:
    feed = service.local_feed(
        user_location=_user_location(req), radius_miles=req.radius_miles
    )
    return LocalFeedResponseSchema(
        radius_miles=req.radius_miles,
        posts=[_post_to_schema(p) for p in feed.posts],
        distances=dict(feed.distances),
    )


@router.post("/charities/nearby", response_model=NearbyCharitiesResponseSchema)
def nearby_charities(
    req: LocalFeedRequestSchema,
    service: LocalFeedService = Depends(get_local_feed_service),
) -> NearbyCharitiesResponseSchema:
    nearby = service.nearby_charities(
        user_location=_user_location(req), radius_miles=req.radius_miles
    )
    return NearbyCharitiesResponseSchema(
        radius_miles=req.radius_miles,
        charities=[
            NearbyCharitySchema(
                charity=_charity_to_schema(n.charity),
                distance_miles=n.distance_miles,
                distance_label=format_distance(n.distance_miles),
            )
            for n in nearby
        ],
    )


@router.post("/feed/followed", response_model=FollowedFeedResponseSchema)
def followed_feed(
    req: FollowedFeedRequestSchema,
    service: LocalFeedService = Depends(get_local_feed_service),
) -> FollowedFeedResponseSchema:
    posts = service.followed_feed(charity_ids=req.charity_ids)
    return FollowedFeedResponseSchema(posts=[_post_to_schema(p) for p in posts])

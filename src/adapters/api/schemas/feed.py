from __future__ import annotations

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class PostSchema(BaseModel):
    id: str
    charity_id: str | None = None
    user_id: str | None = None
    timestamp: str
    type: str = "update"
    title: str | None = None
    content: str | None = None
    image_url: str | None = None
    likes: int = 0
    comments: int = 0
    shares: int = 0


class CharitySchema(BaseModel):
    id: str
    name: str | None = None
    category: str | None = None
    country: str | None = None
    city: str | None = None
    location: GeoPointSchema | None = None


class LocalFeedRequestSchema(BaseModel):
    location: GeoPointSchema | None = None
    # Not clamped; the client enforces the adjustable band.
    radius_miles: float = Field(60.0, ge=0.0)


class LocalFeedResponseSchema(BaseModel):
    radius_miles: float
    posts: list[PostSchema] = []
    distances: dict[str, float] = {}


class NearbyCharitySchema(BaseModel):
    charity: CharitySchema
    distance_miles: float
    distance_label: str


class NearbyCharitiesResponseSchema(BaseModel):
    radius_miles: float
    charities: list[NearbyCharitySchema] = []


class FollowedFeedRequestSchema(BaseModel):
    charity_ids: list[str] = []


class FollowedFeedResponseSchema(BaseModel):
    posts: list[PostSchema] = []

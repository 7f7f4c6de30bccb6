from __future__ import annotations

from dataclasses import dataclass, field

from .charity import Charity
from .post import Post


@dataclass(frozen=True, slots=True)
class DistanceAnnotatedPost:
    post: Post
    distance_miles: float


@dataclass(frozen=True, slots=True)
class NearbyCharity:
    charity: Charity
    distance_miles: float


@dataclass(frozen=True, slots=True)
class LocalFeed:
    """Result of a local feed pass.

    `distances` is keyed by post id and covers exactly the posts in `posts`.
    """

    posts: tuple[Post, ...] = ()
    distances: dict[str, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.posts

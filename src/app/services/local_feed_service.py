from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from src.app.ports.output import IRecordStore
from src.app.services.row_mapping import charity_from_row, post_from_row
from src.domain.algorithms.local_feed import filter_local_feed, find_nearby_charities
from src.domain.models import Charity, GeoPoint, LocalFeed, NearbyCharity, Post

logger = logging.getLogger(__name__)

T = TypeVar("T")

CHARITIES_TABLE = "charities"
POSTS_TABLE = "posts"


def _map_rows(
    rows: Iterable[Mapping[str, Any]], mapper: Callable[[Mapping[str, Any]], T], table: str
) -> list[T]:
    out: list[T] = []
    for row in rows:
        try:
            out.append(mapper(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed %s row: %s", table, exc)
    return out


@dataclass(slots=True)
class LocalFeedService:
    """Application service behind the local and followed feeds.

    Every call reloads from the record store and recomputes from scratch.
    """

    record_store: IRecordStore
    post_limit: int = 100

    def load_charities(self) -> list[Charity]:
        rows = self.record_store.select(
            CHARITIES_TABLE, order_by="created_at", descending=True
        )
        return _map_rows(rows, charity_from_row, CHARITIES_TABLE)

    def load_posts(self, *, charity_ids: Iterable[str] | None = None) -> list[Post]:
        filters = None
        if charity_ids is not None:
            filters = {"charity_id": list(charity_ids)}
        rows = self.record_store.select(
            POSTS_TABLE,
            filters=filters,
            order_by="created_at",
            descending=True,
            limit=self.post_limit,
        )
        return _map_rows(rows, post_from_row, POSTS_TABLE)

    def local_feed(
        self, *, user_location: GeoPoint | None, radius_miles: float
    ) -> LocalFeed:
        if user_location is None:
            return LocalFeed()

        charities_by_id = {c.id: c for c in self.load_charities()}
        posts = self.load_posts()

        feed = filter_local_feed(
            posts, charities_by_id.get, user_location, radius_miles
        )
        logger.info(
            "Local feed: %d of %d posts within %.1f mi",
            len(feed.posts),
            len(posts),
            radius_miles,
        )
        return feed

    def nearby_charities(
        self, *, user_location: GeoPoint | None, radius_miles: float
    ) -> tuple[NearbyCharity, ...]:
        if user_location is None:
            return ()
        return find_nearby_charities(self.load_charities(), user_location, radius_miles)

    def followed_feed(self, *, charity_ids: Iterable[str]) -> tuple[Post, ...]:
        followed = [cid for cid in charity_ids if cid]
        if not followed:
            return ()
        return tuple(self.load_posts(charity_ids=followed))

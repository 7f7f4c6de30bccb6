from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Post:
    """A feed post (subset of the `posts` table).

    `charity_id` is None for posts written by an individual user.
    `timestamp` is the ISO-8601 `created_at` string as stored.
    """

    id: str
    charity_id: str | None
    timestamp: str
    user_id: str | None = None
    type: str = "update"
    title: str | None = None
    content: str | None = None
    image_url: str | None = None
    likes: int = 0
    comments: int = 0
    shares: int = 0

    @property
    def is_user_post(self) -> bool:
        return self.charity_id is None

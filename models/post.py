"""
Post - one ingested, categorized, timestamped feed item.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterable
from pydantic import Field, field_validator

from .base import BaseRecord


class Category(str, Enum):
    """Closed set of post categories. Anything else is rejected at ingestion."""
    TECHNOLOGY = "Technology"
    BUSINESS = "Business"
    SCIENCE = "Science"
    HEALTH = "Health"


# Display colors (hex RGB) shared by the legend, nodes and filter controls
CATEGORY_COLORS: dict[Category, int] = {
    Category.TECHNOLOGY: 0x4E79A7,
    Category.BUSINESS: 0xF28E2C,
    Category.SCIENCE: 0xE15759,
    Category.HEALTH: 0x76B7B2,
}


class Post(BaseRecord):
    """
    A feed item that passed ingestion.

    Two posts with the same id are the same entity across poll cycles,
    even when title, engagement or anything else differs.
    """
    id: str = Field(min_length=1)
    title: str
    link: str = ""
    published_at: datetime
    category: Category
    engagement: float = Field(default=0.0, ge=0.0)  # Only drives node size

    @field_validator("published_at")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC so age arithmetic never mixes kinds
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def day(self) -> date:
        """Calendar day of publication in the host's local zone."""
        return self.published_at.astimezone().date()

    @classmethod
    def from_record(cls, record: dict, category: Category, **kwargs) -> "Post":
        """
        Build a post from a raw feed record.

        Identity comes from the record's native guid, falling back to its
        permalink. A record with neither has no identity and is rejected.
        """
        post_id = (record.get("guid") or record.get("id") or record.get("link") or "").strip()
        if not post_id:
            raise ValueError("record has neither guid nor link")
        return cls(
            id=post_id,
            title=record.get("title") or "",
            link=record.get("link") or "",
            category=category,
            **kwargs,
        )


def identity_of(post: Post) -> str:
    """Stable identity token for a post."""
    return post.id


def same_post(a: Post, b: Post) -> bool:
    """Identity equality - never object identity."""
    return identity_of(a) == identity_of(b)


def dedupe_batch(posts: Iterable[Post]) -> list[Post]:
    """
    Collapse duplicate ids within one ingestion batch.

    Last write wins: the later record in source order replaces the earlier
    one, but keeps the earlier one's slot so arrival order stays stable.
    """
    by_id: dict[str, Post] = {}
    for post in posts:
        by_id[identity_of(post)] = post
    return list(by_id.values())


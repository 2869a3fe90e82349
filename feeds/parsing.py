"""
Record parsing - turn raw feed records into validated posts.

Anything malformed is dropped here and never reaches the engine.
"""

import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from pydantic import ValidationError

from models import Category, Post


# rss2json emits "2024-01-15 12:00:00" (UTC)
_PLAIN_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d")


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a feed date string.

    Accepts RFC 822 (RSS), ISO 8601 (Atom) and rss2json's plain format.
    Returns None if nothing fits.
    """
    if not value:
        return None
    value = value.strip()

    try:
        parsed = parsedate_to_datetime(value)
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    except (TypeError, ValueError, IndexError):
        pass

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    for fmt in _PLAIN_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def random_engagement(rng: random.Random) -> int:
    """Feeds carry no engagement signal; sizes are a placeholder weight."""
    return rng.randrange(100)


def record_to_post(
    record: dict,
    category,
    rng: Optional[random.Random] = None,
    source: str = "feed",
) -> Optional[Post]:
    """
    Validate one raw record.

    Args:
        record: Dict with guid/link/title/pubDate (rss2json shape)
        category: Category (or its name) of the descriptor that produced it
        rng: Random source for engagement
        source: Tag for log lines

    Returns:
        Post, or None if the record is rejected
    """
    rng = rng or random.Random()

    try:
        category = Category(category)
    except ValueError:
        print(f"[{source}] Rejected record: unknown category {category!r}")
        return None

    title = (record.get("title") or "").strip()
    if not title:
        print(f"[{source}] Rejected record: missing title")
        return None

    published_at = parse_pub_date(record.get("pubDate") or record.get("published"))
    if published_at is None:
        print(f"[{source}] Rejected record '{title[:40]}': unparseable date {record.get('pubDate')!r}")
        return None

    engagement = record.get("engagement")
    if engagement is None:
        engagement = random_engagement(rng)

    try:
        return Post.from_record(record, category, published_at=published_at, engagement=engagement)
    except (ValidationError, ValueError) as e:
        print(f"[{source}] Rejected record '{title[:40]}': {e}")
        return None

"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no external dependencies)
- Deterministic (same result every time)
"""

import random
import pytest
from datetime import datetime, timedelta, timezone

from models import Category, Post


@pytest.fixture
def fixed_time():
    """Fixed datetime for deterministic tests."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def make_post(fixed_time):
    """Factory for posts with sensible defaults."""
    def make(post_id="1", title=None, category=Category.TECHNOLOGY, published_at=None,
             age=None, engagement=50, link=None):
        if published_at is None:
            published_at = fixed_time - (age or timedelta(0))
        return Post(
            id=post_id,
            title=title or f"Post {post_id}",
            link=link or f"https://example.com/{post_id}",
            published_at=published_at,
            category=category,
            engagement=engagement,
        )
    return make


@pytest.fixture
def record_data():
    """Raw rss2json item."""
    return {
        "guid": "https://example.com/a?guid=1",
        "title": "  Quantum chips get cheaper  ",
        "link": "https://example.com/a",
        "pubDate": "2024-01-15 10:30:00",
        "author": "Someone",
        "thumbnail": "",
    }


class FakeClock:
    """Millisecond clock the test moves by hand."""

    def __init__(self, start: float = 1_700_000_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()

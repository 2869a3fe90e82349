"""
Feed settings - which sources get polled and how the camera behaves.
"""

from pydantic import Field

from .base import BaseRecord
from .post import Category


class FeedDescriptor(BaseRecord):
    """One polled source. Every post it yields gets this category."""
    url: str = Field(min_length=1)
    category: Category

    def to_dict(self) -> dict:
        return {"url": self.url, "category": self.category.value}


DEFAULT_FEEDS = [
    FeedDescriptor(url="https://rss.nytimes.com/services/xml/rss/nyt/Technology.xml", category=Category.TECHNOLOGY),
    FeedDescriptor(url="https://feeds.bbci.co.uk/news/business/rss.xml", category=Category.BUSINESS),
    FeedDescriptor(url="https://www.sciencedaily.com/rss/top.xml", category=Category.SCIENCE),
    FeedDescriptor(url="https://www.who.int/rss-feeds/news-english.xml", category=Category.HEALTH),
]


class Settings(BaseRecord):
    """
    User settings.

    The poller reads `feeds` at the start of every cycle, so edits take
    effect on the next poll without a restart.
    """
    feeds: list[FeedDescriptor] = Field(default_factory=lambda: list(DEFAULT_FEEDS))
    auto_rotate: bool = True

    def add_feed(self, feed: FeedDescriptor) -> None:
        self.feeds = [*self.feeds, feed]

    def remove_feed(self, index: int) -> FeedDescriptor:
        """Remove by position. Raises IndexError for a bad index."""
        feeds = list(self.feeds)
        removed = feeds.pop(index)
        self.feeds = feeds
        return removed

    def to_dict(self) -> dict:
        return {
            "feeds": [f.to_dict() for f in self.feeds],
            "auto_rotate": self.auto_rotate,
        }

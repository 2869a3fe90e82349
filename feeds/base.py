"""
Feed Source Base - Clean interface for all feed sources.
"""

import os
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from models import FeedDescriptor, Post
from .parsing import record_to_post


@dataclass
class SourceConfig:
    """Configuration for a feed source."""
    timeout: int = 15
    max_items: int = 100
    user_agent: str = "feedgraph/0.1"


class FeedSource(ABC):
    """
    Base class for feed sources.

    Each source must:
    1. Define name, description
    2. Implement fetch_records() - raw records for one descriptor

    fetch() never raises: any failure is logged and yields an empty list,
    which the poller treats as "nothing from this source this cycle".
    """

    name: str
    description: str = ""

    def __init__(self, config: Optional[SourceConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or self._default_config()
        self.rng = rng or random.Random()

    def _default_config(self) -> SourceConfig:
        """Override to set source-specific config."""
        return SourceConfig()

    def get_env(self, key: str, default: str = None) -> Optional[str]:
        """Get environment variable."""
        return os.environ.get(key, default)

    @abstractmethod
    def fetch_records(self, feed: FeedDescriptor) -> list[dict]:
        """
        Fetch raw records (dicts with guid/link/title/pubDate).

        May raise; fetch() handles it.
        """
        pass

    def fetch(self, feed: FeedDescriptor) -> list[Post]:
        """Fetch and validate posts for one feed."""
        print(f"[{self.name}] Fetching: {feed.url}")
        try:
            records = self.fetch_records(feed)
        except Exception as e:
            print(f"[{self.name}] Error fetching {feed.url}: {e}")
            return []

        posts = []
        for record in records[:self.config.max_items]:
            post = record_to_post(record, feed.category, self.rng, source=self.name)
            if post is not None:
                posts.append(post)

        print(f"[{self.name}] {feed.url}: {len(posts)}/{len(records)} records accepted")
        return posts

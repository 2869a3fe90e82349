"""
Fetch every configured feed for one poll cycle.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from models import FeedDescriptor, Post, dedupe_batch
from .base import FeedSource


def fetch_all(feeds: Sequence[FeedDescriptor], source: FeedSource, max_workers: int = 4) -> list[Post]:
    """
    Fetch all feeds concurrently and flatten in descriptor order.

    A failing feed contributes nothing; partial and total failure look the
    same. Duplicate ids across feeds collapse last-write-wins.
    """
    if not feeds:
        return []

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(feeds)))) as executor:
        results = list(executor.map(source.fetch, feeds))

    posts = [post for batch in results for post in batch]
    unique = dedupe_batch(posts)
    print(f"[FEEDS] {len(unique)} posts from {len(feeds)} feeds ({len(posts) - len(unique)} duplicates)")
    return unique

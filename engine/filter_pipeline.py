"""
Filter pipeline - reduce the post collection to what should be visible.

Pure functions only. Safe to call on every keystroke.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from models import FilterState, Post, RecencyWindow


def matches_search(post: Post, search_term: str) -> bool:
    """Case-insensitive substring match on the title. Empty term matches all."""
    return search_term.lower() in post.title.lower()


def within_window(post: Post, window: RecencyWindow, now: datetime) -> bool:
    """Is the post younger than the window's bound?"""
    bound = window.bound_ms
    if bound is None:
        return True
    age_ms = (now - post.published_at).total_seconds() * 1000
    return age_ms < bound


def passes(post: Post, state: FilterState, now: datetime) -> bool:
    """Does a single post survive every filter?"""
    return (
        state.is_visible(post.category)
        and matches_search(post, state.search_term)
        and within_window(post, state.recency_window, now)
    )


def apply_filters(
    posts: Iterable[Post],
    state: FilterState,
    now: Optional[datetime] = None,
) -> list[Post]:
    """
    Filter posts against a FilterState snapshot.

    Output keeps arrival order; filtering never reorders.

    Args:
        posts: Full collection, in arrival order
        state: Filter snapshot
        now: Reference time for the recency window (defaults to current UTC)

    Returns:
        Ordered subsequence of posts that pass
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return [post for post in posts if passes(post, state, now)]

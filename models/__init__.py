"""
Domain models - single source of truth for all records.

Design principles:
- Every record defined once
- Identity is an explicit id, never object identity
- Validation at the boundary
- Scene records are derived data, never persisted
"""

from .base import BaseRecord
from .post import Post, Category, CATEGORY_COLORS, identity_of, same_post, dedupe_batch
from .filters import FilterState, RecencyWindow
from .scene import Vector3, VisualNode, Edge, Effect, HighlightLevel
from .feed import FeedDescriptor, Settings, DEFAULT_FEEDS
from .worker import WorkerStats

__all__ = [
    # Base
    "BaseRecord",
    # Post
    "Post",
    "Category",
    "CATEGORY_COLORS",
    "identity_of",
    "same_post",
    "dedupe_batch",
    # Filters
    "FilterState",
    "RecencyWindow",
    # Scene
    "Vector3",
    "VisualNode",
    "Edge",
    "Effect",
    "HighlightLevel",
    # Feeds
    "FeedDescriptor",
    "Settings",
    "DEFAULT_FEEDS",
    # Worker
    "WorkerStats",
]

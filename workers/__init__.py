"""
Background workers for non-blocking operations.

Workers run continuously on their own thread and push results into the
scene controller, which the HTTP handlers read from.

Workers:
- FeedPollWorker: Polls every configured feed and resyncs the scene
"""

from .base import BaseWorker
from .feed_poller import FeedPollWorker, POLL_INTERVAL

__all__ = ['BaseWorker', 'FeedPollWorker', 'POLL_INTERVAL']

"""
Feed Poll Worker - fetch every configured feed on a fixed interval and push
the result through the scene pipeline.

Single-flight: a poll that would start while another is still fetching is
skipped, so overlapping polls can never race each other into the scene.
"""

import threading
from typing import Callable, Optional

from engine import SceneController
from feeds import FeedSource, fetch_all
from models import Settings
from .base import BaseWorker, STOP_TIMEOUT


POLL_INTERVAL = 60.0  # seconds


class FeedPollWorker(BaseWorker):
    """
    Background poller feeding the scene controller.

    Reads the feed list from settings at the start of every cycle, so feed
    edits take effect on the next poll.
    """

    def __init__(
        self,
        controller: SceneController,
        settings: Settings,
        source: FeedSource,
        interval: float = POLL_INTERVAL,
        fetch: Callable = fetch_all,
    ):
        super().__init__(name="FEED-POLLER", interval=interval)
        self.controller = controller
        self.settings = settings
        self.source = source
        self._fetch = fetch
        self._in_flight = threading.Lock()
        self._now_thread: Optional[threading.Thread] = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight.locked()

    def tick(self) -> None:
        self.poll_once()

    def poll_once(self) -> bool:
        """
        Run one poll cycle on the calling thread.

        Returns False if skipped because another poll is in flight.
        """
        if not self._in_flight.acquire(blocking=False):
            self._skip()
            return False
        try:
            self._run_once()
        finally:
            self._in_flight.release()
        return True

    def poll_now(self) -> bool:
        """
        Trigger an out-of-band poll on a background thread.

        Used when the feed list changes. Returns False if a poll is already
        in flight (the running one will not see the new feeds; the next
        scheduled one will).
        """
        if not self._in_flight.acquire(blocking=False):
            self._skip()
            return False

        def run():
            try:
                self._run_once()
            finally:
                self._in_flight.release()

        self._now_thread = threading.Thread(target=run, name=f"{self.name}-now", daemon=True)
        self._now_thread.start()
        return True

    def stop(self, timeout: float = STOP_TIMEOUT) -> None:
        """Stop the scheduled loop, then wait for any out-of-band poll."""
        super().stop(timeout)
        thread, self._now_thread = self._now_thread, None
        if thread is not None and thread.is_alive():
            thread.join(timeout=timeout)
            if thread.is_alive():
                print(f"[{self.name}] WARNING: Out-of-band poll didn't finish within {timeout}s")

    def _skip(self) -> None:
        print(f"[{self.name}] Poll already in flight, skipping")
        self.stats.record_skip()
        self.notify("poll_skipped", {"skipped": self.stats.items_skipped})

    def _do_work(self) -> int:
        feeds = list(self.settings.feeds)
        self.stats.last_feed_count = len(feeds)

        posts = self._fetch(feeds, self.source)

        if self.stopping or self.controller.closed:
            print(f"[{self.name}] Shutting down, dropping {len(posts)} posts")
            return 0

        result = self.controller.ingest(posts)
        created = len(result.created) if result else 0
        self.notify("poll_complete", {
            "posts": len(posts),
            "visible": len(result.nodes) if result else 0,
            "created": created,
        })
        return len(posts)


"""
Poll statistics - what the feed poller reports through /api/workers.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel


# A poller that fails this many cycles in a row is reported unhealthy
# no matter how good its long-run record is.
MAX_CONSECUTIVE_ERRORS = 3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkerStats(BaseModel):
    """
    Running counters for one background worker.

    A run is a started cycle; it ends in exactly one success or error.
    Skipped cycles (another poll still in flight) are not runs.
    """
    runs: int = 0
    successes: int = 0
    errors: int = 0
    consecutive_errors: int = 0

    items_processed: int = 0  # Posts fetched across all cycles
    items_skipped: int = 0    # Cycles skipped by single-flight

    last_run: Optional[datetime] = None
    last_success: Optional[datetime] = None
    last_error: Optional[datetime] = None
    last_error_message: Optional[str] = None
    last_duration_ms: Optional[float] = None

    last_feed_count: int = 0

    def record_run(self) -> None:
        self.runs += 1
        self.last_run = _utc_now()

    def record_success(self, items: int = 0, duration_ms: Optional[float] = None) -> None:
        self.successes += 1
        self.consecutive_errors = 0
        self.last_success = _utc_now()
        self.items_processed += items
        self.last_duration_ms = duration_ms

    def record_error(self, message: str = None, duration_ms: Optional[float] = None) -> None:
        self.errors += 1
        self.consecutive_errors += 1
        self.last_error = _utc_now()
        self.last_error_message = message
        self.last_duration_ms = duration_ms

    def record_skip(self) -> None:
        self.items_skipped += 1

    @property
    def success_rate(self) -> float:
        """Fraction of runs that succeeded."""
        if self.runs == 0:
            return 0.0
        return self.successes / self.runs

    @property
    def is_healthy(self) -> bool:
        if self.consecutive_errors >= MAX_CONSECUTIVE_ERRORS:
            return False
        if self.runs < 3:
            return True  # Not enough data
        return self.success_rate > 0.5

    def to_dict(self) -> dict:
        """Export for API responses."""
        return {
            "runs": self.runs,
            "successes": self.successes,
            "errors": self.errors,
            "items_processed": self.items_processed,
            "skipped": self.items_skipped,
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "last_success": self.last_success.isoformat() if self.last_success else None,
            "last_error": self.last_error_message,
            "last_duration_ms": self.last_duration_ms,
            "feeds": self.last_feed_count,
            "healthy": self.is_healthy,
        }

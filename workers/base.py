"""
Base worker - a daemon thread running one cycle every `interval` seconds.

Concrete workers implement _do_work(); the base class owns the thread,
the stop event, timing and stats, and event callbacks.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Optional, Callable

from models import WorkerStats


STOP_TIMEOUT = 5.0  # seconds to wait for an in-progress cycle on stop()


class BaseWorker(ABC):
    """
    Interval worker.

    The first cycle runs as soon as the thread starts, then one per
    interval. A failing cycle is logged and counted; the loop carries on.
    Callbacks receive (event_type, data) and can never break the loop.
    """

    def __init__(self, name: str, interval: float = 60.0):
        self.name = name
        self.interval = interval
        self.stats = WorkerStats()
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._callbacks: list[Callable[[str, dict], None]] = []

    # === Lifecycle ===

    def start(self) -> None:
        if self.is_running():
            print(f"[{self.name}] Already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name=self.name, daemon=True)
        self._thread.start()
        print(f"[{self.name}] Started (interval={self.interval}s)")

    def stop(self, timeout: float = STOP_TIMEOUT) -> None:
        """Signal the loop and wait for the current cycle to finish. Safe to call twice."""
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is None:
            return
        if thread.is_alive():
            thread.join(timeout=timeout)
            if thread.is_alive():
                print(f"[{self.name}] WARNING: Thread didn't stop within {timeout}s")
        print(f"[{self.name}] Stopped")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    # === Callbacks ===

    def add_callback(self, callback: Callable[[str, dict], None]) -> None:
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[str, dict], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def notify(self, event_type: str, data: dict) -> None:
        for cb in list(self._callbacks):
            try:
                cb(event_type, data)
            except Exception as e:
                print(f"[{self.name}] Callback error on {event_type}: {e}")

    # === Cycle ===

    def _run_loop(self) -> None:
        print(f"[{self.name}] Loop started")
        while not self._stop_event.is_set():
            self.tick()
            self._stop_event.wait(self.interval)
        print(f"[{self.name}] Loop ended")

    def tick(self) -> None:
        """One scheduled cycle. Subclasses override to gate cycles."""
        self._run_once()

    def _run_once(self) -> None:
        self.stats.record_run()
        started = time.monotonic()
        try:
            items = self._do_work()
        except Exception as e:
            elapsed_ms = (time.monotonic() - started) * 1000
            print(f"[{self.name}] Error after {elapsed_ms:.0f}ms: {e}")
            self.stats.record_error(str(e), duration_ms=elapsed_ms)
            return
        self.stats.record_success(items, duration_ms=(time.monotonic() - started) * 1000)

    @abstractmethod
    def _do_work(self) -> int:
        """
        Do the actual work.

        Returns:
            Number of items processed (for stats)
        """

    def get_stats(self) -> dict:
        """Stats as a dict for the API."""
        return {
            "name": self.name,
            "running": self.is_running(),
            "interval": self.interval,
            **self.stats.to_dict(),
        }

    def __enter__(self) -> "BaseWorker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

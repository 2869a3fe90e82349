"""Unit tests for poll statistics."""

from models import WorkerStats


class TestCounters:

    def test_fresh_stats(self):
        stats = WorkerStats()
        assert (stats.runs, stats.successes, stats.errors, stats.items_skipped) == (0, 0, 0, 0)
        assert stats.last_run is None
        assert stats.to_dict()["last_run"] is None

    def test_run_then_success(self):
        stats = WorkerStats()
        stats.record_run()
        stats.record_success(items=12, duration_ms=340.0)

        assert stats.runs == stats.successes == 1
        assert stats.items_processed == 12
        assert stats.last_duration_ms == 340.0
        assert stats.last_run.tzinfo is not None

    def test_items_accumulate(self):
        stats = WorkerStats()
        stats.record_success(items=3)
        stats.record_success(items=4)
        assert stats.items_processed == 7

    def test_error_keeps_message(self):
        stats = WorkerStats()
        stats.record_error("feed timeout")
        assert stats.errors == 1
        assert stats.last_error_message == "feed timeout"
        assert stats.to_dict()["last_error"] == "feed timeout"

    def test_skips_are_not_runs(self):
        stats = WorkerStats()
        stats.record_skip()
        stats.record_skip()
        assert stats.items_skipped == 2
        assert stats.runs == 0
        assert stats.to_dict()["skipped"] == 2


class TestHealth:

    def test_rate_without_runs(self):
        assert WorkerStats().success_rate == 0.0

    def test_rate(self):
        assert WorkerStats(runs=10, successes=8).success_rate == 0.8

    def test_young_worker_is_healthy(self):
        assert WorkerStats(runs=2).is_healthy

    def test_poor_rate_is_unhealthy(self):
        assert not WorkerStats(runs=10, successes=4, errors=6).is_healthy

    def test_error_streak_is_unhealthy(self):
        stats = WorkerStats(runs=50, successes=47)
        for _ in range(3):
            stats.record_error("offline")
        assert not stats.is_healthy

    def test_success_resets_streak(self):
        stats = WorkerStats(runs=50, successes=45)
        stats.record_error("offline")
        stats.record_error("offline")
        stats.record_success()
        assert stats.consecutive_errors == 0
        assert stats.is_healthy

    def test_feed_count_exported(self):
        d = WorkerStats(runs=5, successes=4, errors=1, last_feed_count=4).to_dict()
        assert d["feeds"] == 4
        assert d["healthy"] is True

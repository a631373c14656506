"""Tests for the background sync scheduler."""

import threading
import time

import pytest

from video_sync.channel.scheduler import SyncScheduler
from video_sync.core.constants import SyncStatus
from video_sync.core.exceptions import ConfigurationError, FetchError


def wait_for(predicate, timeout: float = 5.0) -> bool:
    """Poll ``predicate`` until it is true or ``timeout`` expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def make_scheduler(feed_client, store, notifier):
    created: list[SyncScheduler] = []

    def _make(interval: float = 3600, **kwargs) -> SyncScheduler:
        scheduler = SyncScheduler(
            feed_client, "UCtest", store, notifier=notifier, interval_seconds=interval, **kwargs
        )
        created.append(scheduler)
        return scheduler

    yield _make

    for scheduler in created:
        scheduler.stop(timeout=5)


class TestSyncScheduler:
    """Test scheduling, disabling and non-overlap."""

    def test_configuration_error_disables_sync(self, make_scheduler, feed_client):
        feed_client.resolve_error = ConfigurationError("Channel not found: UCtest")
        scheduler = make_scheduler()

        assert scheduler.start() is False
        assert scheduler.enabled is False
        assert scheduler.disabled_reason == "Channel not found: UCtest"
        assert not scheduler.is_running
        assert feed_client.fetch_calls == 0

        # Not retried for the rest of the process
        feed_client.resolve_error = None
        assert scheduler.start() is False
        assert feed_client.resolve_calls == 1

    def test_runs_immediately_on_start(self, make_scheduler, feed_client, make_entry):
        feed_client.feed = [make_entry("a")]
        scheduler = make_scheduler(interval=3600)

        assert scheduler.start() is True
        assert wait_for(lambda: scheduler.run_count == 1)
        assert scheduler.feed_id == "UUtest"
        assert scheduler.last_result.status == SyncStatus.UPDATED

        scheduler.stop()
        assert not scheduler.is_running
        assert feed_client.fetch_calls == 1

    def test_repeats_on_interval(self, make_scheduler, feed_client):
        scheduler = make_scheduler(interval=0.01)
        scheduler.start()

        assert wait_for(lambda: scheduler.run_count >= 3)
        scheduler.stop()

        count = scheduler.run_count
        time.sleep(0.05)
        assert scheduler.run_count == count

    def test_cycles_never_overlap(self, make_scheduler, feed_client):
        lock = threading.Lock()
        active = 0
        max_active = 0

        def slow_fetch(feed_id):
            nonlocal active, max_active
            with lock:
                active += 1
                max_active = max(max_active, active)
            time.sleep(0.02)
            with lock:
                active -= 1
            feed_client.fetch_calls += 1
            return []

        feed_client.fetch_all_items = slow_fetch
        scheduler = make_scheduler(interval=0.001)
        scheduler.start()

        assert wait_for(lambda: feed_client.fetch_calls >= 5)
        scheduler.stop()
        assert max_active == 1

    def test_start_is_idempotent(self, make_scheduler, feed_client):
        scheduler = make_scheduler()
        scheduler.start()
        scheduler.start()

        assert wait_for(lambda: scheduler.run_count == 1)
        assert feed_client.resolve_calls == 1

    def test_transient_resolution_failure_is_retried(self, make_scheduler, feed_client):
        feed_client.resolve_error = FetchError("connection reset")
        scheduler = make_scheduler()

        assert scheduler.start() is True
        assert wait_for(lambda: feed_client.resolve_calls >= 2)
        assert scheduler.enabled is True
        assert scheduler.run_count == 0
        scheduler.stop()

        feed_client.resolve_error = None
        result = scheduler.run_cycle()
        assert result is not None
        assert result.status == SyncStatus.EMPTY
        assert scheduler.feed_id == "UUtest"

    def test_fetch_failure_keeps_schedule_running(self, make_scheduler, feed_client, fetch_error):
        feed_client.error = fetch_error
        scheduler = make_scheduler(interval=0.01)
        scheduler.start()

        assert wait_for(lambda: scheduler.run_count >= 2)
        assert scheduler.is_running
        assert scheduler.last_result.status == SyncStatus.FETCH_FAILED

    def test_unexpected_error_keeps_schedule_running(self, make_scheduler, feed_client):
        feed_client.error = RuntimeError("boom")
        scheduler = make_scheduler(interval=0.01)
        scheduler.start()

        assert wait_for(lambda: feed_client.fetch_calls >= 2)
        assert scheduler.is_running

    def test_run_forever_returns_when_disabled(self, make_scheduler, feed_client):
        feed_client.resolve_error = ConfigurationError("API key not valid")
        scheduler = make_scheduler()

        scheduler.run_forever()

        assert scheduler.enabled is False
        assert feed_client.fetch_calls == 0

    def test_run_forever_stops_on_event(self, make_scheduler, feed_client):
        scheduler = make_scheduler(interval=0.01)
        runner = threading.Thread(target=scheduler.run_forever)
        runner.start()

        assert wait_for(lambda: scheduler.run_count >= 2)
        scheduler.stop()
        runner.join(timeout=5)
        assert not runner.is_alive()

    def test_status_snapshot(self, make_scheduler, feed_client):
        scheduler = make_scheduler(interval=120)
        scheduler.start()
        assert wait_for(lambda: scheduler.run_count == 1)

        status = scheduler.status()
        assert status["enabled"] is True
        assert status["running"] is True
        assert status["feed_id"] == "UUtest"
        assert status["interval_seconds"] == 120
        assert status["last_result"]["status"] == SyncStatus.EMPTY
